from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .model import ArchitectureNode, ViewMode

STRUCTURE = "structure"
DEPENDENCY = "dependency"


class GraphNode:
	"""An architecture node plus the transient state of one layout."""
	def __init__(self, node: ArchitectureNode, index: int):
		self.node = node
		self.index = index
		self.id = node.id
		self.path = node.path
		parts = node.path.split("/")
		self.depth = len(parts)
		self.parent_path: Optional[str] = "/".join(parts[:-1]) or None
		self.child_ids: List[str] = []
		self.x = 0.0
		self.y = 0.0
		self.vx = 0.0
		self.vy = 0.0
		self.fx: Optional[float] = None  # Pinned position while dragged
		self.fy: Optional[float] = None

	@property
	def pinned(self) -> bool:
		return self.fx is not None


class GraphLink:
	"""A directed edge between two graph nodes."""
	def __init__(self, source: GraphNode, target: GraphNode, kind: str):
		self.source = source
		self.target = target
		self.kind = kind  # "structure" or "dependency"

	def __repr__(self) -> str:
		return f"GraphLink({self.source.id!r} -> {self.target.id!r}, {self.kind})"


def build_graph_nodes(nodes: Sequence[ArchitectureNode]) -> List[GraphNode]:
	graph_nodes = [GraphNode(n, i) for i, n in enumerate(nodes)]
	for gn in graph_nodes:
		prefix = gn.path + "/"
		gn.child_ids = [other.id for other in graph_nodes if other.path.startswith(prefix)]
	return graph_nodes


def structure_links(nodes: Sequence[GraphNode]) -> List[GraphLink]:
	"""Link each node to the node whose path is exactly its parent path."""
	by_path: Dict[str, GraphNode] = {}
	for n in nodes:
		by_path.setdefault(n.path, n)
	links: List[GraphLink] = []
	for n in nodes:
		if n.parent_path is None:
			continue
		parent = by_path.get(n.parent_path)
		if parent is not None:
			links.append(GraphLink(parent, n, STRUCTURE))
	return links


def _depends_on(dep: str, candidate: GraphNode) -> bool:
	name = candidate.node.name
	return name == dep or dep in candidate.path or (bool(name) and name in dep)


def dependency_links(nodes: Sequence[GraphNode]) -> List[GraphLink]:
	"""Link a node to every other node matched by one of its raw dependency strings."""
	links: List[GraphLink] = []
	for source in nodes:
		targets: Dict[str, GraphNode] = {}
		for dep in source.node.dependencies:
			for candidate in nodes:
				if candidate is source or candidate.id in targets:
					continue
				if _depends_on(dep, candidate):
					targets[candidate.id] = candidate
		for target in targets.values():
			links.append(GraphLink(source, target, DEPENDENCY))
	return links


def links_for_mode(nodes: Sequence[GraphNode], mode: ViewMode) -> List[GraphLink]:
	links: List[GraphLink] = []
	if mode in (ViewMode.STRUCTURE, ViewMode.BOTH):
		links.extend(structure_links(nodes))
	if mode in (ViewMode.DEPENDENCIES, ViewMode.BOTH):
		links.extend(dependency_links(nodes))
	return links
