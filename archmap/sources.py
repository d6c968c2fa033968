"""File handles: the input boundary of the analysis."""

from __future__ import annotations

import asyncio
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Protocol

from .config import settings

logger = logging.getLogger(__name__)


class FileHandle(Protocol):
	"""A project entry with a relative ``/``-joined path and a scoped text read."""

	path: str
	size: int
	last_modified: Optional[datetime]
	is_directory: bool

	async def read_text(self) -> str:
		"""Read the whole entry; raise ``OSError`` (or subclass) on failure."""
		...


class LocalFileHandle:
	"""A file or directory on the local filesystem."""

	def __init__(self, root: Path, abs_path: Path):
		self.abs_path = abs_path
		self.path = abs_path.relative_to(root).as_posix()
		self.is_directory = abs_path.is_dir()
		stat = abs_path.stat()
		self.size = 0 if self.is_directory else stat.st_size
		self.last_modified = datetime.fromtimestamp(stat.st_mtime)

	async def read_text(self) -> str:
		if self.is_directory:
			return ""
		return await asyncio.to_thread(self.abs_path.read_text, encoding="utf-8", errors="replace")

	def __repr__(self) -> str:
		return f"LocalFileHandle({self.path!r})"


def scan_directory(root: str, ignore_dirs: Optional[Iterable[str]] = None) -> List[LocalFileHandle]:
	"""Walk *root* and return handles for every directory and file below it.

	Paths are relative to the parent of *root*, so the first segment of every
	path is the project directory name. Entries come out parents-first.
	"""
	ignored = set(ignore_dirs if ignore_dirs is not None else settings.ignore_dirs)
	root_path = Path(root).resolve()
	base = root_path.parent
	handles: List[LocalFileHandle] = [LocalFileHandle(base, root_path)]
	for dirpath, dirnames, filenames in os.walk(root_path):
		dirnames[:] = sorted(d for d in dirnames if d not in ignored)
		current = Path(dirpath)
		for name in dirnames + sorted(filenames):
			try:
				handles.append(LocalFileHandle(base, current / name))
			except FileNotFoundError:
				# Dangling symlink
				logger.warning("Skipping unreadable entry %s", current / name)
	logger.debug("Scanned %d entries under %s", len(handles), root_path)
	return handles
