import logging
import math
import numbers
from enum import Enum
from typing import Iterable, Tuple

import numpy as np

from image_graphcut.errors import EmptySeedSet, OutOfBoundsSeed, OverlappingSeeds, SolverFailure
from image_graphcut.graphcut.maxflow_graph import MaxflowGraph
from image_graphcut.image_processing.noise import compute_noise
from image_graphcut.image_processing.weights import Weights
from image_graphcut.utils import BACKGROUND_VALUE, as_channel_image

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


class SegmentationState(Enum):
	IDLE = "idle"
	VALIDATING = "validating"
	BUILDING_MODEL = "building model"
	BUILDING_GRAPH = "building graph"
	SOLVING = "solving"
	WRITING_MASK = "writing mask"


class ImageGraphCut:
	"""
	Foreground/background segmentation of an image from user seeds, with a minimum cut.

	Every call to run() builds its histograms and graph from scratch and drops them once the mask is written.
	Only the parameters, the seeds and the last mask are kept between runs.
	"""

	def __init__(self, terminal_lambda=0.01, histogram_bins=10, graph_factory=MaxflowGraph, verbose=False):
		self.configure(terminal_lambda, histogram_bins)

		self.graph_factory = graph_factory
		self.verbose = verbose

		self.sources = frozenset()
		self.sinks = frozenset()

		self.state = SegmentationState.IDLE
		self.segment_mask = None
		self.flow = None

	def configure(self, terminal_lambda, histogram_bins):
		"""
		:param terminal_lambda: weight of the data term against the smoothness term
		:param histogram_bins: number of histogram bins per channel
		"""
		if isinstance(terminal_lambda, bool) or not isinstance(terminal_lambda, numbers.Real) \
				or not math.isfinite(terminal_lambda) or terminal_lambda < 0:
			raise ValueError("Lambda must be a finite non-negative number, got " + repr(terminal_lambda))
		if isinstance(histogram_bins, bool) or int(histogram_bins) != histogram_bins or histogram_bins < 1:
			raise ValueError("Histogram bin count must be a positive integer, got " + repr(histogram_bins))

		self.terminal_lambda = float(terminal_lambda)
		self.histogram_bins = int(histogram_bins)

	def set_seeds(self, sources: Iterable[Coordinate], sinks: Iterable[Coordinate]):
		self.sources = frozenset((int(r), int(c)) for r, c in sources)
		self.sinks = frozenset((int(r), int(c)) for r, c in sinks)

	def _set_state(self, state):
		logger.debug("%s -> %s", self.state.value, state.value)
		self.state = state

	def check_seeds_not_empty(self):
		empty = [name for name, seeds in (("sources", self.sources), ("sinks", self.sinks)) if len(seeds) == 0]
		if empty:
			raise EmptySeedSet(empty)

	def validate_seeds(self, shape):
		self.check_seeds_not_empty()

		rows, cols = shape
		for r, c in sorted(self.sources | self.sinks):
			if not (0 <= r < rows and 0 <= c < cols):
				raise OutOfBoundsSeed((r, c), (rows, cols))

		overlap = self.sources & self.sinks
		if overlap:
			raise OverlappingSeeds(overlap)

	def run(self, image) -> np.ndarray:
		"""
		:param image: array of shape (rows, cols) or (rows, cols, channels), values in [0, 255]
		:return: uint8 mask, 255 on the foreground and 0 on the background
		:raise SegmentationError: the run failed, segment_mask is left as it was
		"""
		try:
			return self._run(image)
		finally:
			self._set_state(SegmentationState.IDLE)

	def _run(self, image):
		self._set_state(SegmentationState.VALIDATING)
		self.check_seeds_not_empty()
		img = as_channel_image(image)
		rows, cols = img.shape[:2]
		self.validate_seeds((rows, cols))

		mask = np.full((rows, cols), BACKGROUND_VALUE, dtype=np.uint8)

		self._set_state(SegmentationState.BUILDING_MODEL)
		sigma = compute_noise(img)
		weights = Weights(self.terminal_lambda, self.histogram_bins, verbose=self.verbose)
		weights.compute_weights(img, self.sources, self.sinks, sigma=sigma)

		self._set_state(SegmentationState.BUILDING_GRAPH)
		graph, nodes = weights.build_maxflow_graph(self.graph_factory)

		self._set_state(SegmentationState.SOLVING)
		try:
			flow = graph.solve()
		except Exception as exc:
			raise SolverFailure("Max-flow computation failed: " + str(exc)) from exc
		if flow is None or not math.isfinite(flow):
			raise SolverFailure("Max-flow computation returned a non-finite flow: " + repr(flow))

		self._set_state(SegmentationState.WRITING_MASK)
		weights.build_mask_from_maxflow_labels(graph, nodes, mask)
		del graph, nodes

		self.segment_mask = mask
		self.flow = flow
		logger.info("Segmented %dx%d image: %d foreground pixels, flow %g (sigma %.3f, lambda %g, %d bins)",
					rows, cols, int(np.count_nonzero(mask)), flow, sigma, self.terminal_lambda, self.histogram_bins)
		return mask
