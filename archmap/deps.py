"""Lexical import/export extraction.

The extractor works on raw text with regular expressions; nothing is
resolved against the filesystem, so import targets stay as written
(``'./components/Button'``, ``'react'``). Dynamic ``import()``, template
literal imports and re-exports are not recognized.
"""

from __future__ import annotations

import re
from typing import List, Protocol

from .model import DependencyRecord


IMPORT_PATTERN = re.compile(r"""import\s+.*?\s+from\s+['"]([^'"]+)['"]""")
EXPORT_PATTERN = re.compile(
	r"export\s+(?:default\s+)?(?:function|class|const|let|var)\s+(\w+)", re.ASCII
)


class DependencyExtractor(Protocol):
	"""Protocol for per-file dependency extractors."""

	def extract(self, content: str, path: str) -> DependencyRecord:
		"""Return the imports, exports and dependencies found in *content*.

		*path* is only used for context; implementations must not fail on
		malformed or empty input.
		"""
		...


class RegexDependencyExtractor:
	"""Matches ``import ... from '...'`` and ``export [default] <decl> <name>``."""

	def extract(self, content: str, path: str) -> DependencyRecord:
		imports: List[str] = []
		dependencies: List[str] = []
		for match in IMPORT_PATTERN.finditer(content):
			target = match.group(1)
			imports.append(target)
			dependencies.append(target)

		exports = [m.group(1) for m in EXPORT_PATTERN.finditer(content)]

		return DependencyRecord(imports=imports, exports=exports, dependencies=dependencies)


def extract_dependencies(content: str, path: str = "") -> DependencyRecord:
	return RegexDependencyExtractor().extract(content, path)
