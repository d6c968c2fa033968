import os
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_IGNORE_DIRS = [".git", "node_modules", "dist", "build", "__pycache__"]


def _env_int(name: str, default: int) -> int:
	value = os.getenv(name)
	return int(value) if value else default


def _env_float(name: str, default: float) -> float:
	value = os.getenv(name)
	return float(value) if value else default


class Settings:
	def __init__(self):
		self.log_level = os.getenv("ARCHMAP_LOG_LEVEL", "INFO").upper()
		self.log_dir: Optional[str] = os.getenv("ARCHMAP_LOG_DIR") or None
		self.max_concurrent_reads = _env_int("ARCHMAP_MAX_CONCURRENT_READS", 32)
		ignore = os.getenv("ARCHMAP_IGNORE_DIRS")
		self.ignore_dirs: List[str] = (
			[d.strip() for d in ignore.split(",") if d.strip()] if ignore else list(DEFAULT_IGNORE_DIRS)
		)
		self.canvas_width = _env_int("ARCHMAP_CANVAS_WIDTH", 800)
		self.canvas_height = _env_int("ARCHMAP_CANVAS_HEIGHT", 600)
		self.link_distance = _env_float("ARCHMAP_LINK_DISTANCE", 120.0)
		self.charge_strength = _env_float("ARCHMAP_CHARGE_STRENGTH", -400.0)
		self.collide_radius = _env_float("ARCHMAP_COLLIDE_RADIUS", 30.0)
		self.tick_interval = _env_float("ARCHMAP_TICK_INTERVAL", 1 / 60)
		self.max_ticks = _env_int("ARCHMAP_MAX_TICKS", 1000)

	def validate(self) -> None:
		"""Validate configuration and raise error if invalid."""
		if self.log_level not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
			raise ValueError(f"Invalid ARCHMAP_LOG_LEVEL: {self.log_level}")
		if self.max_concurrent_reads < 1:
			raise ValueError("ARCHMAP_MAX_CONCURRENT_READS must be at least 1")
		if self.canvas_width <= 0 or self.canvas_height <= 0:
			raise ValueError("Canvas dimensions must be positive")
		if self.collide_radius < 0:
			raise ValueError("ARCHMAP_COLLIDE_RADIUS must not be negative")
		if self.tick_interval < 0:
			raise ValueError("ARCHMAP_TICK_INTERVAL must not be negative")


def load_settings() -> Settings:
	"""Re-read the environment into a fresh Settings object."""
	return Settings()


settings = load_settings()
