"""Force-directed layout in the manner of d3-force.

One ``tick()`` cools alpha, applies every force to node velocities, then
integrates positions with velocity decay. Pinned nodes (``fx``/``fy``) are
held in place.
"""

from __future__ import annotations

import math
import random
from typing import Dict, List, Optional, Sequence

from .graph import GraphLink, GraphNode

ALPHA_MIN = 0.001
ALPHA_DECAY = 1 - ALPHA_MIN ** (1 / 300)
VELOCITY_DECAY = 0.4
INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))
REHEAT_ALPHA_TARGET = 0.3


class ForceSimulation:
	def __init__(
		self,
		nodes: Sequence[GraphNode],
		links: Sequence[GraphLink],
		center: tuple = (0.0, 0.0),
		link_distance: float = 120.0,
		charge_strength: float = -400.0,
		collide_radius: float = 30.0,
		seed: Optional[int] = 0,
	):
		self.nodes = list(nodes)
		self.links = list(links)
		self.center_x, self.center_y = center
		self.link_distance = link_distance
		self.charge_strength = charge_strength
		self.collide_radius = collide_radius
		self.alpha = 1.0
		self.alpha_min = ALPHA_MIN
		self.alpha_decay = ALPHA_DECAY
		self.alpha_target = 0.0
		self.velocity_decay = 1 - VELOCITY_DECAY
		self.ticks = 0
		self._random = random.Random(seed)
		self._place_initial()
		self._init_links()

	def _place_initial(self) -> None:
		# Phyllotaxis arrangement for nodes without a position
		for i, node in enumerate(self.nodes):
			if node.fx is not None:
				node.x = node.fx
			if node.fy is not None:
				node.y = node.fy
			if node.x == 0.0 and node.y == 0.0:
				radius = INITIAL_RADIUS * math.sqrt(0.5 + i)
				angle = i * INITIAL_ANGLE
				node.x = radius * math.cos(angle)
				node.y = radius * math.sin(angle)
			node.vx = node.vy = 0.0

	def _init_links(self) -> None:
		count: Dict[int, int] = {}
		for link in self.links:
			count[link.source.index] = count.get(link.source.index, 0) + 1
			count[link.target.index] = count.get(link.target.index, 0) + 1
		self._strengths: List[float] = []
		self._biases: List[float] = []
		for link in self.links:
			s = count[link.source.index]
			t = count[link.target.index]
			self._strengths.append(1 / min(s, t))
			self._biases.append(s / (s + t))

	def _jiggle(self) -> float:
		return (self._random.random() - 0.5) * 1e-6

	@property
	def settled(self) -> bool:
		return self.alpha < self.alpha_min

	def reheat(self, target: float = REHEAT_ALPHA_TARGET) -> None:
		self.alpha_target = target
		if self.alpha < self.alpha_min:
			self.alpha = self.alpha_min

	def cool(self) -> None:
		self.alpha_target = 0.0

	def tick(self) -> None:
		self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay
		self._force_link()
		self._force_many_body()
		self._force_center()
		self._force_collide()
		for node in self.nodes:
			if node.fx is None:
				node.vx *= self.velocity_decay
				node.x += node.vx
			else:
				node.x = node.fx
				node.vx = 0.0
			if node.fy is None:
				node.vy *= self.velocity_decay
				node.y += node.vy
			else:
				node.y = node.fy
				node.vy = 0.0
		self.ticks += 1

	def _force_link(self) -> None:
		for link, strength, bias in zip(self.links, self._strengths, self._biases):
			source, target = link.source, link.target
			x = target.x + target.vx - source.x - source.vx or self._jiggle()
			y = target.y + target.vy - source.y - source.vy or self._jiggle()
			length = math.sqrt(x * x + y * y)
			length = (length - self.link_distance) / length * self.alpha * strength
			x *= length
			y *= length
			target.vx -= x * bias
			target.vy -= y * bias
			source.vx += x * (1 - bias)
			source.vy += y * (1 - bias)

	def _force_many_body(self) -> None:
		# Exact pairwise repulsion; project graphs stay small enough to skip Barnes-Hut
		nodes = self.nodes
		for node in nodes:
			for other in nodes:
				if other is node:
					continue
				x = other.x - node.x
				y = other.y - node.y
				if x == 0:
					x = self._jiggle()
				if y == 0:
					y = self._jiggle()
				dist2 = x * x + y * y
				if dist2 < 1:
					dist2 = math.sqrt(dist2)
				weight = self.charge_strength * self.alpha / dist2
				node.vx += x * weight
				node.vy += y * weight

	def _force_collide(self) -> None:
		radius = self.collide_radius
		if radius <= 0:
			return
		reach = radius + radius
		nodes = self.nodes
		for i, node in enumerate(nodes):
			xi = node.x + node.vx
			yi = node.y + node.vy
			for other in nodes[i + 1:]:
				x = xi - other.x - other.vx
				y = yi - other.y - other.vy
				dist2 = x * x + y * y
				if dist2 >= reach * reach:
					continue
				if x == 0:
					x = self._jiggle()
					dist2 += x * x
				if y == 0:
					y = self._jiggle()
					dist2 += y * y
				dist = math.sqrt(dist2)
				push = (reach - dist) / dist * 0.5
				node.vx += x * push
				node.vy += y * push
				other.vx -= x * push
				other.vy -= y * push

	def _force_center(self) -> None:
		if not self.nodes:
			return
		sx = sum(n.x for n in self.nodes) / len(self.nodes) - self.center_x
		sy = sum(n.y for n in self.nodes) / len(self.nodes) - self.center_y
		for node in self.nodes:
			node.x -= sx
			node.y -= sy

	def run(self, max_ticks: int = 1000) -> int:
		"""Tick until settled or *max_ticks* is reached; return ticks taken."""
		taken = 0
		while not self.settled and taken < max_ticks:
			self.tick()
			taken += 1
		return taken
