"""Orchestrator: read → extract → synthesize → aggregate."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, List, Optional, Sequence

from .architecture import synthesize_architecture
from .classify import extension_of, file_name_of, is_analyzable, is_code_file
from .config import settings
from .deps import DependencyExtractor, RegexDependencyExtractor
from .errors import ReadFailure
from .file_tree import build_file_tree
from .model import DependencyRecord, FileKind, ProjectAnalysis, ProjectFile
from .sources import FileHandle
from .stats import compute_statistics

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]

UNTITLED_PROJECT = "Untitled Project"


def guess_project_name(handles: Sequence[FileHandle]) -> str:
	"""First path segment of the first entry, as a folder upload names its root."""
	if handles and "/" in handles[0].path:
		return handles[0].path.split("/")[0]
	if handles and handles[0].is_directory:
		return handles[0].path
	return UNTITLED_PROJECT


async def _read_entry(handle: FileHandle, semaphore: asyncio.Semaphore) -> ProjectFile:
	async with semaphore:
		if handle.is_directory:
			content = None
		else:
			try:
				content = await handle.read_text()
			except Exception as e:
				raise ReadFailure(handle.path, str(e)) from e

	return ProjectFile(
		path=handle.path,
		name=file_name_of(handle.path),
		kind=FileKind.DIRECTORY if handle.is_directory else FileKind.FILE,
		extension=extension_of(handle.path),
		size=0 if handle.is_directory else handle.size,
		content=content,
		last_modified=handle.last_modified,
	)


async def read_project_files(
	handles: Sequence[FileHandle],
	on_progress: Optional[ProgressCallback] = None,
	max_concurrent: Optional[int] = None,
) -> List[ProjectFile]:
	"""Read every analyzable entry concurrently.

	Results keep input order. All reads are awaited before a failure is
	raised; the first failing entry in input order wins.
	"""
	selected = [h for h in handles if h.is_directory or is_analyzable(h.path)]
	skipped = len(handles) - len(selected)
	if skipped:
		logger.debug("Skipping %d unsupported files", skipped)

	total = len(selected)
	done = 0
	semaphore = asyncio.Semaphore(max_concurrent or settings.max_concurrent_reads)

	async def _tracked(handle: FileHandle) -> ProjectFile:
		nonlocal done
		try:
			return await _read_entry(handle, semaphore)
		finally:
			done += 1
			if on_progress is not None:
				on_progress(done * 100 // total)

	results = await asyncio.gather(*(_tracked(h) for h in selected), return_exceptions=True)

	files: List[ProjectFile] = []
	for result in results:
		if isinstance(result, BaseException):
			raise result
		files.append(result)
	return files


def build_analysis(
	name: str,
	files: Sequence[ProjectFile],
	extractor: Optional[DependencyExtractor] = None,
) -> ProjectAnalysis:
	extractor = extractor or RegexDependencyExtractor()

	records: Dict[str, DependencyRecord] = {}
	for f in files:
		if f.kind == FileKind.FILE and f.content and is_code_file(f.path):
			records[f.path] = extractor.extract(f.content, f.path)

	architecture = synthesize_architecture(files, records)
	statistics = compute_statistics(files, records)
	tree = build_file_tree(files)

	logger.info(
		"Analyzed %s: %d files, %d architecture nodes, %d dependency records",
		name,
		statistics.total_files,
		len(architecture),
		len(records),
	)
	return ProjectAnalysis(
		name=name,
		root_path="/",
		files=tree,
		dependencies=records,
		architecture=architecture,
		statistics=statistics,
	)


async def analyze_project(
	handles: Sequence[FileHandle],
	name: Optional[str] = None,
	extractor: Optional[DependencyExtractor] = None,
	on_progress: Optional[ProgressCallback] = None,
) -> ProjectAnalysis:
	"""Run the whole analysis. Raises ``ReadFailure`` if any read fails."""
	files = await read_project_files(handles, on_progress=on_progress)
	return build_analysis(name or guess_project_name(handles), files, extractor)
