"""Analysis session: status transitions, progress and the current result."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from .deps import DependencyExtractor
from .errors import ArchmapError
from .model import AnalysisStatus, ProjectAnalysis, StatusSnapshot
from .pipeline import build_analysis, guess_project_name, read_project_files
from .sources import FileHandle

logger = logging.getLogger(__name__)

Listener = Callable[[StatusSnapshot], None]


class AnalysisSession:
	"""Holds at most one ``ProjectAnalysis`` and swaps it only on success.

	A run started while another is in flight supersedes it: the older run's
	result is discarded when it completes.
	"""

	def __init__(self, extractor: Optional[DependencyExtractor] = None):
		self.extractor = extractor
		self.status = AnalysisStatus.IDLE
		self.progress = 0
		self.error: Optional[str] = None
		self.analysis: Optional[ProjectAnalysis] = None
		self._listeners: List[Listener] = []
		self._generation = 0

	def subscribe(self, listener: Listener) -> None:
		self._listeners.append(listener)

	def snapshot(self) -> StatusSnapshot:
		return StatusSnapshot(
			status=self.status,
			progress=self.progress,
			error=self.error,
			has_result=self.analysis is not None,
		)

	def _transition(self, generation: int, status: AnalysisStatus, progress: Optional[int] = None) -> None:
		if generation != self._generation:
			return
		self.status = status
		if progress is not None:
			self.progress = progress
		snap = self.snapshot()
		for listener in self._listeners:
			listener(snap)

	async def run(self, handles: Sequence[FileHandle], name: Optional[str] = None) -> Optional[ProjectAnalysis]:
		"""Analyze *handles*; return the new analysis, or None on failure or supersession."""
		self._generation += 1
		generation = self._generation
		self.error = None
		self._transition(generation, AnalysisStatus.UPLOADING, 0)

		try:
			files = await read_project_files(
				handles,
				on_progress=lambda p: self._transition(generation, AnalysisStatus.UPLOADING, p),
			)
			self._transition(generation, AnalysisStatus.ANALYZING)
			analysis = build_analysis(name or guess_project_name(handles), files, self.extractor)
		except ArchmapError as e:
			if generation == self._generation:
				logger.error("Analysis failed: %s", e)
				self.error = str(e)
				self._transition(generation, AnalysisStatus.ERROR)
			return None
		except Exception as e:
			if generation == self._generation:
				logger.exception("Unexpected error during analysis")
				self.error = str(e) or type(e).__name__
				self._transition(generation, AnalysisStatus.ERROR)
			raise

		if generation != self._generation:
			logger.debug("Discarding superseded analysis of %s", analysis.name)
			return None
		self.analysis = analysis
		self._transition(generation, AnalysisStatus.SUCCESS, 100)
		return analysis

	def reset(self) -> None:
		"""Back to idle after an error; the current result, if any, stays."""
		self._generation += 1
		self.status = AnalysisStatus.IDLE
		self.progress = 0
		self.error = None
