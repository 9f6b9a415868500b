"""Shared test fixtures."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from image_graphcut.graphcut.maxflow_graph import Terminal


DARK = 20
BRIGHT = 230


class RecordingGraph:
    """Stand-in for the max-flow collaborator, records every call and labels every node as sink."""

    def __init__(self, node_count_hint=0, edge_count_hint=0):
        self.node_count_hint = node_count_hint
        self.edge_count_hint = edge_count_hint
        self.nodes = []
        self.edges = []
        self.tweights = {}
        self.solved = False

    def add_node(self):
        self.nodes.append(len(self.nodes))
        return self.nodes[-1]

    def add_edge(self, a, b, capacity_ab, capacity_ba):
        self.edges.append((a, b, capacity_ab, capacity_ba))

    def add_terminal_weights(self, node, source_capacity, sink_capacity):
        assert node not in self.tweights
        self.tweights[node] = (source_capacity, sink_capacity)

    def solve(self):
        self.solved = True
        return 0.

    def terminal_of(self, node):
        return Terminal.SINK


class RecordingFactory:
    def __init__(self):
        self.graphs = []

    def __call__(self, node_count_hint=0, edge_count_hint=0):
        g = RecordingGraph(node_count_hint, edge_count_hint)
        self.graphs.append(g)
        return g


@pytest.fixture
def recording_factory() -> RecordingFactory:
    return RecordingFactory()


@pytest.fixture
def gradient_image() -> np.ndarray:
    return np.array([[0, 64, 128],
                     [64, 128, 192],
                     [128, 192, 255]], dtype=np.uint8)


@pytest.fixture
def two_region_image() -> np.ndarray:
    """6x8 grayscale image, dark on the 4 left columns and bright on the 4 right ones."""
    img = np.full((6, 8), DARK, dtype=np.uint8)
    img[:, 4:] = BRIGHT
    return img


@pytest.fixture
def two_region_color_image() -> np.ndarray:
    img = np.zeros((6, 8, 3), dtype=np.uint8)
    img[:, :4] = (200, 30, 30)
    img[:, 4:] = (30, 30, 200)
    return img


@pytest.fixture
def two_region_seeds():
    sources = {(1, 6), (4, 5)}
    sinks = {(2, 1), (5, 0)}
    return sources, sinks


@pytest.fixture
def random_image() -> np.ndarray:
    rng = np.random.default_rng(0)
    return rng.integers(0, 256, size=(9, 11, 3), dtype=np.uint8)
