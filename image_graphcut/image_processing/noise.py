import logging

import numpy as np

from image_graphcut.errors import InvalidImage
from image_graphcut.utils import forward_differences

logger = logging.getLogger(__name__)


def compute_noise(img):
    """
    Estimate of the "camera noise", used to normalise the non terminal weights.
    :param img: image of shape (rows, cols, channels)
    :return: mean Euclidean distance between every pixel and its right and bottom neighbours
    """
    hori, vert = forward_differences(img)
    nb_edges = hori.size + vert.size
    if nb_edges == 0:
        raise InvalidImage("Image of shape " + str(img.shape[:2]) + " has no neighbouring pixels")

    sigma = (np.sum(hori) + np.sum(vert)) / nb_edges
    logger.debug("Noise sigma %.4f over %d edges", sigma, nb_edges)
    return float(sigma)
