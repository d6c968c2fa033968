"""Exceptions raised by the analysis pipeline."""

from __future__ import annotations


class ArchmapError(Exception):
	"""Base class for archmap failures."""


class ReadFailure(ArchmapError):
	"""A project file could not be read; the whole analysis is aborted."""

	def __init__(self, path: str, reason: str):
		self.path = path
		self.reason = reason
		super().__init__(f"Failed to read {path}: {reason}")
