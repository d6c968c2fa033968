from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence

from .architecture import classify_role
from .classify import language_of
from .model import DependencyRecord, FileKind, ProjectFile, ProjectStatistics, Role


def _bump(counter: Dict[str, int], key: str) -> None:
	counter[key] = counter.get(key, 0) + 1


def compute_statistics(
	files: Sequence[ProjectFile],
	records: Optional[Mapping[str, DependencyRecord]] = None,
) -> ProjectStatistics:
	total_files = 0
	total_lines = 0
	total_size = 0
	file_types: Dict[str, int] = {}
	languages: Dict[str, int] = {}
	roles: Dict[str, int] = {}

	for f in files:
		if f.kind != FileKind.FILE:
			continue
		total_files += 1
		total_size += f.size
		extension = f.extension or ""
		_bump(file_types, extension)

		if f.content is not None:
			total_lines += len(f.content.split("\n"))
			_bump(languages, language_of(extension))

		# Recomputed rather than read from the architecture nodes: non-code files count too
		_bump(roles, classify_role(f.path, f.content or "").value)

	dependencies = sum(len(r.dependencies) for r in records.values()) if records else 0

	return ProjectStatistics(
		total_files=total_files,
		total_lines=total_lines,
		total_size=total_size,
		file_types=file_types,
		languages=languages,
		roles=roles,
		dependencies=dependencies,
		components=roles.get(Role.COMPONENT.value, 0),
		services=roles.get(Role.SERVICE.value, 0),
		pages=roles.get(Role.PAGE.value, 0),
	)


def summarize_statistics(name: str, stats: ProjectStatistics) -> str:
	parts = [
		f"Project {name}: {stats.total_files} files, {stats.total_lines} lines, {stats.total_size} bytes",
	]
	if stats.languages:
		langs = sorted(stats.languages.items(), key=lambda kv: (-kv[1], kv[0]))
		parts.append(f"  Languages: {', '.join(f'{k} ({v})' for k, v in langs)}")
	if stats.roles:
		parts.append(f"  Roles: {', '.join(f'{k} ({v})' for k, v in sorted(stats.roles.items()))}")
	parts.append(f"  Dependencies: {stats.dependencies}")
	return "\n".join(parts)
