from enum import IntEnum

import maxflow


class Terminal(IntEnum):
	SOURCE = 0  # foreground
	SINK = 1  # background


class MaxflowGraph:
	"""
	Thin wrapper around the Boykov-Kolmogorov graph of PyMaxflow.
	Any object exposing add_node, add_edge, add_terminal_weights, solve and terminal_of can be used in its place.
	"""

	def __init__(self, node_count_hint=0, edge_count_hint=0):
		self.graph = maxflow.Graph[float](node_count_hint, edge_count_hint)
		self.solved = False

	def add_node(self) -> int:
		return int(self.graph.add_nodes(1)[0])

	def add_edge(self, a, b, capacity_ab, capacity_ba):
		self.graph.add_edge(a, b, capacity_ab, capacity_ba)

	def add_terminal_weights(self, node, source_capacity, sink_capacity):
		self.graph.add_tedge(node, source_capacity, sink_capacity)

	def solve(self) -> float:
		flow = self.graph.maxflow()
		self.solved = True
		return flow

	def terminal_of(self, node) -> Terminal:
		if not self.solved:
			raise RuntimeError("terminal_of called before solve")
		return Terminal(self.graph.get_segment(node))
