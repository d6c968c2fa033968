"""Interactive architecture diagram.

Owns one force simulation over the current node set and view mode and
moves through ``IDLE -> SIMULATING -> SETTLED``. Any change to the node set
or the view mode throws the simulation away and starts again from ``IDLE``.
Zoom and pan only change the view transform; drag pins a node.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .config import settings
from .graph import GraphLink, GraphNode, build_graph_nodes, links_for_mode
from .model import (
	ArchitectureNode,
	LayoutState,
	Role,
	Scene,
	SceneLink,
	SceneNode,
	ViewMode,
	ViewTransform,
)
from .simulation import ForceSimulation

logger = logging.getLogger(__name__)

SCALE_EXTENT = (0.1, 4.0)
DEFAULT_COMPLEXITY = 10

ROLE_COLORS: Dict[Role, str] = {
	Role.COMPONENT: "#3b82f6",
	Role.SERVICE: "#10b981",
	Role.PAGE: "#8b5cf6",
	Role.API: "#f59e0b",
	Role.DATABASE: "#ef4444",
	Role.UTILITY: "#6b7280",
	Role.CONFIG: "#9ca3af",
}


def _clamp(value: float, low: float, high: float) -> float:
	return max(low, min(high, value))


def node_shape(role: Role, complexity: int) -> Tuple[str, float, float]:
	"""Shape name and bounding box for a node; grows with complexity within fixed bounds."""
	c = complexity
	if role == Role.PAGE:
		return "rect", _clamp(c * 4, 40, 80), _clamp(c * 3, 30, 60)
	if role == Role.SERVICE:
		size = _clamp(c, 20, 40) * 2
		return "diamond", size, size
	if role == Role.DATABASE:
		return "cylinder", _clamp(c * 3, 30, 60), _clamp(c * 2, 20, 40)
	diameter = _clamp(c, 20, 40) * 2
	return "circle", diameter, diameter


def _path_label(path: str) -> str:
	return "/".join(path.split("/")[-2:])


class ArchitectureDiagram:
	"""Layout session over a list of architecture nodes."""

	def __init__(
		self,
		nodes: Sequence[ArchitectureNode] = (),
		width: Optional[int] = None,
		height: Optional[int] = None,
		view_mode: ViewMode = ViewMode.BOTH,
		seed: Optional[int] = 0,
	):
		self.width = width or settings.canvas_width
		self.height = height or settings.canvas_height
		self.view_mode = view_mode
		self.seed = seed
		self.transform = ViewTransform()
		self.state = LayoutState.IDLE
		self._source: List[ArchitectureNode] = list(nodes)
		self._task: Optional[asyncio.Task] = None
		self._rebuild()

	# -- node set and view mode --------------------------------------------

	def _rebuild(self) -> None:
		self.nodes: List[GraphNode] = build_graph_nodes(self._source)
		self.links: List[GraphLink] = links_for_mode(self.nodes, self.view_mode)
		self._by_id: Dict[str, GraphNode] = {n.id: n for n in self.nodes}
		self.simulation = ForceSimulation(
			self.nodes,
			self.links,
			center=(self.width / 2, self.height / 2),
			link_distance=settings.link_distance,
			charge_strength=settings.charge_strength,
			collide_radius=settings.collide_radius,
			seed=self.seed,
		)
		self.state = LayoutState.IDLE
		logger.debug(
			"Diagram rebuilt: %d nodes, %d links (%s)", len(self.nodes), len(self.links), self.view_mode.value
		)

	def set_nodes(self, nodes: Sequence[ArchitectureNode]) -> None:
		was_running = self.running
		self.stop()
		self._source = list(nodes)
		self._rebuild()
		if was_running:
			self.start()

	def set_view_mode(self, mode: ViewMode) -> None:
		if mode == self.view_mode:
			return
		was_running = self.running
		self.stop()
		self.view_mode = ViewMode(mode)
		self._rebuild()
		if was_running:
			self.start()

	# -- simulation loop ---------------------------------------------------

	@property
	def running(self) -> bool:
		return self._task is not None and not self._task.done()

	def step(self) -> LayoutState:
		"""Advance one tick; the state settles once alpha has decayed."""
		if self.state == LayoutState.SETTLED:
			return self.state
		if not self.nodes:
			self.state = LayoutState.SETTLED
			return self.state
		self.state = LayoutState.SIMULATING
		self.simulation.tick()
		if self.simulation.settled:
			self.state = LayoutState.SETTLED
		return self.state

	def run_until_settled(self, max_ticks: Optional[int] = None) -> LayoutState:
		limit = max_ticks if max_ticks is not None else settings.max_ticks
		for _ in range(limit):
			if self.step() == LayoutState.SETTLED:
				break
		return self.state

	async def _loop(self, interval: float) -> None:
		while self.step() != LayoutState.SETTLED:
			await asyncio.sleep(interval)
		logger.debug("Layout settled after %d ticks", self.simulation.ticks)

	def start(self, interval: Optional[float] = None) -> asyncio.Task:
		"""Schedule the tick loop on the running event loop."""
		if self.running:
			return self._task
		tick = interval if interval is not None else settings.tick_interval
		self._task = asyncio.get_running_loop().create_task(self._loop(tick))
		return self._task

	def stop(self) -> None:
		if self._task is not None and not self._task.done():
			self._task.cancel()
		self._task = None

	def close(self) -> None:
		self.stop()
		self._source = []
		self._rebuild()

	def _resume(self) -> None:
		self.state = LayoutState.SIMULATING
		if self._task is not None and self._task.done():
			self._task = None
			self.start()

	# -- interaction -------------------------------------------------------

	def to_layout(self, sx: float, sy: float) -> Tuple[float, float]:
		"""Screen coordinates to layout coordinates under the current transform."""
		t = self.transform
		return (sx - t.x) / t.k, (sy - t.y) / t.k

	def node(self, node_id: str) -> GraphNode:
		try:
			return self._by_id[node_id]
		except KeyError:
			raise KeyError(f"Unknown node: {node_id}") from None

	def drag_start(self, node_id: str) -> None:
		n = self.node(node_id)
		n.fx, n.fy = n.x, n.y
		self.simulation.reheat()
		self._resume()

	def drag_move(self, node_id: str, sx: float, sy: float) -> None:
		n = self.node(node_id)
		n.fx, n.fy = self.to_layout(sx, sy)

	def drag_end(self, node_id: str) -> None:
		n = self.node(node_id)
		n.fx = n.fy = None
		self.simulation.cool()

	def zoom(self, factor: float, cx: Optional[float] = None, cy: Optional[float] = None) -> ViewTransform:
		"""Scale about the screen point (cx, cy), the canvas centre by default."""
		t = self.transform
		cx = self.width / 2 if cx is None else cx
		cy = self.height / 2 if cy is None else cy
		k = _clamp(t.k * factor, *SCALE_EXTENT)
		lx, ly = self.to_layout(cx, cy)
		self.transform = ViewTransform(x=cx - lx * k, y=cy - ly * k, k=k)
		return self.transform

	def pan(self, dx: float, dy: float) -> ViewTransform:
		t = self.transform
		self.transform = ViewTransform(x=t.x + dx, y=t.y + dy, k=t.k)
		return self.transform

	def reset_view(self) -> ViewTransform:
		self.transform = ViewTransform()
		return self.transform

	# -- output ------------------------------------------------------------

	def scene(self) -> Scene:
		show_paths = self.view_mode in (ViewMode.STRUCTURE, ViewMode.BOTH)
		nodes = []
		for n in self.nodes:
			role = n.node.role
			shape, w, h = node_shape(role, n.node.complexity or DEFAULT_COMPLEXITY)
			nodes.append(
				SceneNode(
					id=n.id,
					name=n.node.name,
					role=role,
					path=n.path,
					x=n.x,
					y=n.y,
					shape=shape,
					width=w,
					height=h,
					color=ROLE_COLORS[role],
					label=n.node.name,
					role_label=role.value.upper(),
					path_label=_path_label(n.path) if show_paths else None,
					pinned=n.pinned,
				)
			)
		links = [
			SceneLink(
				source=link.source.id,
				target=link.target.id,
				kind=link.kind,
				x1=link.source.x,
				y1=link.source.y,
				x2=link.target.x,
				y2=link.target.y,
			)
			for link in self.links
		]
		return Scene(
			width=self.width,
			height=self.height,
			view_mode=self.view_mode,
			state=self.state,
			alpha=self.simulation.alpha,
			transform=self.transform,
			nodes=nodes,
			links=links,
		)
