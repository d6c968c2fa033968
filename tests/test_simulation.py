import math

from archmap.graph import GraphLink, build_graph_nodes
from archmap.model import ArchitectureNode, Role
from archmap.simulation import ForceSimulation


def _nodes(count):
	return build_graph_nodes(
		[ArchitectureNode(id=f"n{i}.ts", name=f"n{i}.ts", role=Role.UTILITY, path=f"n{i}.ts") for i in range(count)]
	)


def _distance(a, b):
	return math.hypot(a.x - b.x, a.y - b.y)


def test_repulsion_spreads_nodes_and_settles():
	a, b = _nodes(2)
	start = _distance(a, b)
	sim = ForceSimulation([a, b], [], center=(400, 300))
	ticks = sim.run(max_ticks=1000)
	assert sim.settled
	assert 0 < ticks < 1000
	assert _distance(a, b) > start


def test_center_force_keeps_mean_on_center():
	nodes = _nodes(5)
	sim = ForceSimulation(nodes, [], center=(400, 300))
	sim.run()
	assert abs(sum(n.x for n in nodes) / 5 - 400) < 1e-3
	assert abs(sum(n.y for n in nodes) / 5 - 300) < 1e-3


def test_link_pulls_toward_target_distance():
	a, b = _nodes(2)
	sim = ForceSimulation([a, b], [GraphLink(a, b, "dependency")], charge_strength=0.0, collide_radius=0.0)
	sim.run()
	assert abs(_distance(a, b) - 120) < 5


def test_collision_separates_overlapping_nodes():
	a, b = _nodes(2)
	sim = ForceSimulation([a, b], [], charge_strength=0.0, collide_radius=30.0)
	sim.run()
	assert _distance(a, b) >= 55


def test_pinned_node_does_not_move():
	nodes = _nodes(3)
	nodes[0].fx, nodes[0].fy = 10.0, 20.0
	sim = ForceSimulation(nodes, [], center=(400, 300))
	for _ in range(50):
		sim.tick()
	assert (nodes[0].x, nodes[0].y) == (10.0, 20.0)


def test_reheat_and_cool():
	sim = ForceSimulation(_nodes(2), [])
	sim.run()
	assert sim.settled
	sim.reheat()
	assert not sim.settled
	before = sim.alpha
	sim.tick()
	assert sim.alpha > before
	sim.cool()
	sim.run()
	assert sim.settled


def test_empty_simulation():
	sim = ForceSimulation([], [])
	sim.run()
	assert sim.settled
