from image_graphcut.errors import *
from image_graphcut.utils import *
from image_graphcut.image_processing.histogram import Histogram, build_histogram
from image_graphcut.image_processing.noise import compute_noise
from image_graphcut.image_processing.weights import Weights
from image_graphcut.graphcut.maxflow_graph import MaxflowGraph, Terminal
from image_graphcut.graphcut.image_graph_cut import ImageGraphCut, SegmentationState
