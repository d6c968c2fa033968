"""
Logging setup for archmap.
Configures the package logger with console and optional file output.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


def setup_logger(
	name: str = "archmap",
	level: Union[int, str] = logging.INFO,
	log_dir: Optional[str] = None,
	log_to_console: bool = True,
) -> logging.Logger:
	"""
	Set up the package logger.

	Args:
		name: Logger name; module loggers created with ``logging.getLogger(__name__)``
			inside the package propagate to it
		level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
		log_dir: Directory for a daily log file; no file is written when None
		log_to_console: Whether to log to stderr

	Returns:
		Configured logger instance
	"""
	logger = logging.getLogger(name)
	logger.setLevel(level)

	# Avoid adding handlers multiple times
	if logger.handlers:
		return logger

	formatter = logging.Formatter(
		fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
		datefmt="%Y-%m-%d %H:%M:%S",
	)

	if log_to_console:
		console_handler = logging.StreamHandler()
		console_handler.setFormatter(formatter)
		logger.addHandler(console_handler)

	if log_dir:
		Path(log_dir).mkdir(parents=True, exist_ok=True)
		timestamp = datetime.now().strftime("%Y%m%d")
		log_file = os.path.join(log_dir, f"archmap_{timestamp}.log")

		file_handler = logging.FileHandler(log_file, encoding="utf-8")
		file_handler.setFormatter(formatter)
		logger.addHandler(file_handler)

	return logger
