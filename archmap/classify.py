from __future__ import annotations

from typing import Dict, FrozenSet


EXTENSION_LANGUAGE: Dict[str, str] = {
	".ts": "TypeScript",
	".tsx": "TypeScript",
	".js": "JavaScript",
	".jsx": "JavaScript",
	".py": "Python",
	".java": "Java",
	".cs": "C#",
	".cpp": "C++",
	".c": "C",
	".php": "PHP",
	".rb": "Ruby",
	".go": "Go",
	".rs": "Rust",
	".swift": "Swift",
	".kt": "Kotlin",
	".html": "HTML",
	".css": "CSS",
	".scss": "SCSS",
	".sass": "Sass",
	".less": "Less",
	".json": "JSON",
	".yaml": "YAML",
	".yml": "YAML",
	".xml": "XML",
	".md": "Markdown",
}

SUPPORTED_EXTENSIONS: FrozenSet[str] = frozenset(
	[
		".ts", ".tsx", ".js", ".jsx", ".vue", ".svelte",
		".py", ".java", ".cs", ".cpp", ".c", ".h",
		".php", ".rb", ".go", ".rs", ".swift", ".kt",
		".html", ".css", ".scss", ".sass", ".less",
		".json", ".yaml", ".yml", ".xml", ".md",
	]
)

CODE_EXTENSIONS: FrozenSet[str] = frozenset(
	[
		".ts", ".tsx", ".js", ".jsx", ".py", ".java", ".cs", ".cpp",
		".c", ".php", ".rb", ".go", ".rs", ".swift", ".kt",
	]
)


def file_name_of(path: str) -> str:
	return path.rsplit("/", 1)[-1] or path


def directory_name_of(path: str) -> str:
	parts = path.split("/")
	return parts[-2] if len(parts) > 1 else ""


def extension_of(path: str) -> str:
	# Taken from the last segment only, dot included: "a/b.test.ts" -> ".ts"
	name = file_name_of(path)
	dot = name.rfind(".")
	return name[dot:] if dot != -1 else ""


def base_name_of(path: str) -> str:
	"""File name without its final extension: ``src/utils/helpers.ts`` -> ``helpers``."""
	name = file_name_of(path)
	dot = name.rfind(".")
	return name[:dot] if dot > 0 else name


def is_analyzable(path: str) -> bool:
	ext = extension_of(path)
	return ext == "" or ext.lower() in SUPPORTED_EXTENSIONS


def is_code_file(path: str) -> bool:
	return extension_of(path).lower() in CODE_EXTENSIONS


def language_of(extension: str) -> str:
	return EXTENSION_LANGUAGE.get(extension.lower(), "Unknown")
