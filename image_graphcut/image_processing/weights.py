import logging

import numpy as np
from tqdm import tqdm

from image_graphcut.graphcut.maxflow_graph import MaxflowGraph, Terminal
from image_graphcut.image_processing.histogram import build_histogram
from image_graphcut.image_processing.noise import compute_noise
from image_graphcut.utils import BACKGROUND_VALUE, FOREGROUND_VALUE, forward_differences

logger = logging.getLogger(__name__)

# Replaces empty histogram bins before taking the log, since log(0) = -inf
TINY_PROBABILITY = 1e-10


class Weights:
    def __init__(self, terminal_lambda=0.01, histogram_bins=10, verbose=False):
        self.terminal_lambda = terminal_lambda
        self.histogram_bins = histogram_bins
        self.verbose = verbose

        self.sigma = None
        self.fg_histogram = None
        self.bg_histogram = None

        self.w_if = None
        self.w_ib = None
        self.hori_w_ij = None
        self.vert_w_ij = None
        self.hard_capacity = None

    def non_terminal_weights(self, distances, sigma):
        """
        :param distances: Euclidean distances between neighbouring pixels
        :param sigma: noise estimate of the image
        :return: the weight of the edge between two pixels.
        weight is large if pixels are similar and low if not
        """
        distances = np.asarray(distances, dtype=np.float64)
        if sigma == 0:
            # Constant image: every distance is 0
            return np.ones_like(distances)
        return np.exp(-distances ** 2 / (2 * sigma ** 2))

    def likelihood_costs(self, probabilities):
        """
        :param probabilities: P(pixel | class) for every pixel
        :return: -lambda * ln(P), with empty bins replaced by TINY_PROBABILITY
        """
        p = np.where(probabilities <= 0, TINY_PROBABILITY, probabilities)
        return -self.terminal_lambda * np.log(p)

    def hard_constraint_capacity(self):
        """
        Capacity standing for infinity on the terminal edges of the seeds.
        It exceeds the sum of every other capacity, so no minimum cut can ever sever it.
        """
        finite = np.sum(self.hori_w_ij) + np.sum(self.vert_w_ij) + np.sum(self.w_if) + np.sum(self.w_ib)
        return float(finite) + 1.

    def compute_weights(self, img, sources, sinks, sigma=None):
        """
        :param img: float image of shape (rows, cols, channels)
        :param sources: coordinates of the foreground seeds
        :param sinks: coordinates of the background seeds
        :param sigma: noise estimate, computed from the image if not given
        """
        if sigma is None:
            sigma = compute_noise(img)
        self.sigma = sigma

        # Compute the histograms of the foreground and background seeds
        self.fg_histogram = build_histogram(img, sources, self.histogram_bins)
        self.bg_histogram = build_histogram(img, sinks, self.histogram_bins)

        # Non-terminal edges, towards the right neighbour and the neighbour below
        hori_norm, vert_norm = forward_differences(img)
        self.hori_w_ij = self.non_terminal_weights(hori_norm, sigma)
        self.vert_w_ij = self.non_terminal_weights(vert_norm, sigma)

        # Terminal edges: cutting the source edge labels the pixel background, so it costs -lambda ln P(background)
        pf = self.fg_histogram.probabilities(img)
        pb = self.bg_histogram.probabilities(img)
        self.w_if = self.likelihood_costs(pb)
        self.w_ib = self.likelihood_costs(pf)

        # Seeds are hard constraints, they override the data term
        self.hard_capacity = self.hard_constraint_capacity()
        logger.debug("Hard constraint capacity %g", self.hard_capacity)

        src = np.array(sorted(sources), dtype=np.int64).reshape(-1, 2)
        snk = np.array(sorted(sinks), dtype=np.int64).reshape(-1, 2)
        self.w_if[src[:, 0], src[:, 1]] = self.hard_capacity
        self.w_ib[src[:, 0], src[:, 1]] = 0
        self.w_if[snk[:, 0], snk[:, 1]] = 0
        self.w_ib[snk[:, 0], snk[:, 1]] = self.hard_capacity

    def build_maxflow_graph(self, graph_factory=MaxflowGraph):
        """
        :param graph_factory: callable(node_count_hint, edge_count_hint) returning the max-flow graph
        :return: the graph, and the node of every pixel in an array of shape (rows, cols)
        """
        rows, cols = self.w_if.shape
        n_nodes = rows * cols
        n_edges = (rows * (cols - 1) + (rows - 1) * cols) * 2
        g = graph_factory(n_nodes, n_edges)

        nodes = np.empty((rows, cols), dtype=np.int64)
        for r in range(rows):
            for c in range(cols):
                nodes[r, c] = g.add_node()

        for r in tqdm(range(rows), desc="Building graph", disable=not self.verbose):
            for c in range(cols):
                node = int(nodes[r, c])
                g.add_terminal_weights(node, float(self.w_if[r, c]), float(self.w_ib[r, c]))

                # Right neighbour
                if c < cols - 1:
                    w = float(self.hori_w_ij[r, c])
                    g.add_edge(node, int(nodes[r, c + 1]), w, w)

                # Neighbour below
                if r < rows - 1:
                    w = float(self.vert_w_ij[r, c])
                    g.add_edge(node, int(nodes[r + 1, c]), w, w)

        return g, nodes

    def build_mask_from_maxflow_labels(self, g, nodes, mask=None):
        """
        :param g: solved graph
        :param nodes: node of every pixel
        :param mask: array to write into, a new one is allocated if None
        :return: mask with FOREGROUND_VALUE on pixels left on the source side
        """
        if mask is None:
            mask = np.full(nodes.shape, BACKGROUND_VALUE, dtype=np.uint8)

        rows, cols = nodes.shape
        for r in range(rows):
            for c in range(cols):
                if g.terminal_of(int(nodes[r, c])) == Terminal.SOURCE:
                    mask[r, c] = FOREGROUND_VALUE
                else:
                    mask[r, c] = BACKGROUND_VALUE

        return mask
