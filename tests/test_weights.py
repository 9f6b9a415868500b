"""Tests for the edge weights and the graph construction."""

import numpy as np
import pytest

from image_graphcut.graphcut.maxflow_graph import Terminal
from image_graphcut.image_processing.weights import TINY_PROBABILITY, Weights
from image_graphcut.utils import BACKGROUND_VALUE, FOREGROUND_VALUE, as_channel_image


def _computed_weights(image, sources, sinks, **kwargs):
    weights = Weights(**kwargs)
    weights.compute_weights(as_channel_image(image), sources, sinks)
    return weights


def test_non_terminal_weights_range():
    weights = Weights()
    w = weights.non_terminal_weights(np.array([0., 1., 10., 30.]), sigma=10.)
    assert w[0] == 1.
    assert np.all(w > 0.)
    assert np.all(np.diff(w) < 0.)
    assert w[2] == pytest.approx(np.exp(-0.5))


def test_non_terminal_weights_without_noise():
    w = Weights().non_terminal_weights(np.zeros((3, 4)), sigma=0.)
    assert np.all(w == 1.)


def test_likelihood_costs_replace_empty_bins():
    weights = Weights(terminal_lambda=2.)
    costs = weights.likelihood_costs(np.array([1., 0.5, 0.]))
    assert costs[0] == 0.
    assert costs[1] == pytest.approx(-2. * np.log(0.5))
    assert costs[2] == pytest.approx(-2. * np.log(TINY_PROBABILITY))


def test_edge_weight_shapes(random_image):
    weights = _computed_weights(random_image, {(0, 0)}, {(8, 10)})
    assert weights.hori_w_ij.shape == (9, 10)
    assert weights.vert_w_ij.shape == (8, 11)
    assert weights.w_if.shape == weights.w_ib.shape == (9, 11)


def test_data_term_follows_class_likelihood(two_region_image, two_region_seeds):
    sources, sinks = two_region_seeds
    weights = _computed_weights(two_region_image, sources, sinks)

    # Dark, non seed pixel: background for sure, cheap to keep on the sink side
    assert weights.w_if[0, 0] == pytest.approx(0.)
    assert weights.w_ib[0, 0] == pytest.approx(-0.01 * np.log(TINY_PROBABILITY))
    # Bright pixel, the other way around
    assert weights.w_if[0, 7] == pytest.approx(-0.01 * np.log(TINY_PROBABILITY))
    assert weights.w_ib[0, 7] == pytest.approx(0.)


def test_seeds_override_data_term(two_region_image, two_region_seeds):
    sources, sinks = two_region_seeds
    weights = _computed_weights(two_region_image, sources, sinks, terminal_lambda=5.)

    for r, c in sources:
        assert weights.w_if[r, c] == weights.hard_capacity
        assert weights.w_ib[r, c] == 0.
    for r, c in sinks:
        assert weights.w_if[r, c] == 0.
        assert weights.w_ib[r, c] == weights.hard_capacity

    not_seeds = np.ones(weights.w_if.shape, dtype=bool)
    for r, c in sources | sinks:
        not_seeds[r, c] = False
    finite = weights.hori_w_ij.sum() + weights.vert_w_ij.sum() + weights.w_if[not_seeds].sum() + weights.w_ib[not_seeds].sum()
    assert np.isfinite(weights.hard_capacity)
    assert weights.hard_capacity > finite


def test_graph_has_one_node_per_pixel(recording_factory):
    image = np.arange(12, dtype=np.uint8).reshape(3, 4) * 20
    weights = _computed_weights(image, {(0, 0)}, {(2, 3)})
    g, nodes = weights.build_maxflow_graph(recording_factory)

    assert nodes.shape == (3, 4)
    assert len(g.nodes) == 12
    assert sorted(nodes.ravel().tolist()) == g.nodes
    assert sorted(g.tweights) == g.nodes
    assert g.node_count_hint == 12


def test_n_edges_are_symmetric_and_unique(recording_factory):
    image = np.arange(12, dtype=np.uint8).reshape(3, 4) * 20
    weights = _computed_weights(image, {(0, 0)}, {(2, 3)})
    g, nodes = weights.build_maxflow_graph(recording_factory)

    # 3 rows of 3 horizontal edges, 2 rows of 4 vertical edges
    assert len(g.edges) == 3 * 3 + 2 * 4
    pairs = set()
    for a, b, cap_ab, cap_ba in g.edges:
        assert cap_ab == cap_ba
        assert 0. < cap_ab <= 1.
        pairs.add(frozenset((a, b)))
    assert len(pairs) == len(g.edges)

    right = {frozenset((nodes[r, c], nodes[r, c + 1])) for r in range(3) for c in range(3)}
    below = {frozenset((nodes[r, c], nodes[r + 1, c])) for r in range(2) for c in range(4)}
    assert pairs == right | below


def test_terminal_weights_reach_the_graph(recording_factory):
    image = np.arange(12, dtype=np.uint8).reshape(3, 4) * 20
    weights = _computed_weights(image, {(0, 0)}, {(2, 3)})
    g, nodes = weights.build_maxflow_graph(recording_factory)

    assert g.tweights[nodes[0, 0]] == (weights.hard_capacity, 0.)
    assert g.tweights[nodes[2, 3]] == (0., weights.hard_capacity)
    assert g.tweights[nodes[1, 1]] == (weights.w_if[1, 1], weights.w_ib[1, 1])


def test_mask_read_back():
    class Labels:
        def terminal_of(self, node):
            return Terminal.SOURCE if node % 2 == 0 else Terminal.SINK

    nodes = np.arange(6).reshape(2, 3)
    mask = Weights().build_mask_from_maxflow_labels(Labels(), nodes)

    assert mask.dtype == np.uint8
    assert mask.tolist() == [[FOREGROUND_VALUE, BACKGROUND_VALUE, FOREGROUND_VALUE],
                             [BACKGROUND_VALUE, FOREGROUND_VALUE, BACKGROUND_VALUE]]
