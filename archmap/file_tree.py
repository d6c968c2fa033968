from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .model import FileKind, ProjectFile


def build_file_tree(files: Sequence[ProjectFile]) -> List[ProjectFile]:
	"""Nest a flat path list into a forest.

	Children keep input order. An entry whose parent directory is missing
	is attached at the root instead of being dropped.
	"""
	by_path: Dict[str, ProjectFile] = {}
	for f in files:
		by_path[f.path] = f.model_copy(update={"children": []})

	tree: List[ProjectFile] = []
	for f in files:
		node = by_path[f.path]
		parts = f.path.split("/")
		if len(parts) == 1:
			tree.append(node)
			continue
		parent = by_path.get("/".join(parts[:-1]))
		if parent is not None and parent.kind == FileKind.DIRECTORY:
			parent.children.append(node)
		else:
			tree.append(node)
	return tree


def flatten_tree(tree: Sequence[ProjectFile]) -> List[ProjectFile]:
	flat: List[ProjectFile] = []
	stack = list(reversed(tree))
	while stack:
		node = stack.pop()
		flat.append(node)
		stack.extend(reversed(node.children))
	return flat


def filter_tree(
	tree: Sequence[ProjectFile],
	search: Optional[str] = None,
	extension: Optional[str] = None,
) -> List[ProjectFile]:
	"""Keep files whose name contains *search* and whose extension equals *extension*.

	A directory is kept when at least one descendant is.
	"""
	term = search.lower() if search else None
	kept: List[ProjectFile] = []
	for node in tree:
		if node.kind == FileKind.DIRECTORY:
			children = filter_tree(node.children, search, extension)
			if children:
				kept.append(node.model_copy(update={"children": children}))
			continue
		if term and term not in node.name.lower():
			continue
		if extension and (node.extension or "") != extension:
			continue
		kept.append(node)
	return kept
