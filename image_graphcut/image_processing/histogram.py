import logging

import numpy as np

from image_graphcut.errors import DegenerateHistogram

logger = logging.getLogger(__name__)

BIN_MINIMUM = 0.
BIN_MAXIMUM = 255.


class Histogram:
    """
    Uniform histogram over [0, 255] in every channel, with the same number of bins per channel.
    Counts are kept in a dense grid of shape (bins,) * channels.
    """

    def __init__(self, bins=10, channels=1):
        if int(bins) != bins or bins < 1:
            raise ValueError("Histogram bin count must be a positive integer, got " + str(bins))
        if int(channels) != channels or channels < 1:
            raise ValueError("Channel count must be a positive integer, got " + str(channels))

        self.bins = int(bins)
        self.channels = int(channels)
        self.counts = np.zeros((self.bins,) * self.channels, dtype=np.int64)
        self.total_frequency = 0

    def bin_indices(self, pixels) -> np.ndarray:
        """
        :param pixels: array of shape (..., channels)
        :return: integer bin index per channel, same shape as pixels
        """
        values = np.asarray(pixels, dtype=np.float64)
        width = (BIN_MAXIMUM - BIN_MINIMUM) / self.bins
        idx = np.floor((values - BIN_MINIMUM) / width)
        # The maximum belongs to the last bin, out of range values are clamped
        return np.clip(idx, 0, self.bins - 1).astype(np.int64)

    def bin_index(self, pixel):
        return tuple(self.bin_indices(np.reshape(pixel, (self.channels,))).tolist())

    def add_sample(self, pixel):
        self.counts[self.bin_index(pixel)] += 1
        self.total_frequency += 1

    def add_samples(self, pixels):
        """
        :param pixels: array of shape (n, channels)
        """
        pixels = np.reshape(pixels, (-1, self.channels))
        if len(pixels) == 0:
            return
        idx = self.bin_indices(pixels)
        np.add.at(self.counts, tuple(idx.T), 1)
        self.total_frequency += len(pixels)

    def frequency(self, index):
        return int(self.counts[tuple(index)])

    def _check_total(self):
        if self.total_frequency <= 0:
            raise DegenerateHistogram("Histogram has a total frequency of zero")

    def probability(self, pixel):
        """
        :return: frequency of the bin of the pixel divided by the total frequency
        """
        self._check_total()
        return self.frequency(self.bin_index(pixel)) / self.total_frequency

    def probabilities(self, img) -> np.ndarray:
        """
        :param img: image of shape (rows, cols, channels)
        :return: probability of every pixel under this histogram, shape (rows, cols)
        """
        self._check_total()
        idx = self.bin_indices(img)
        freq = self.counts[tuple(np.moveaxis(idx, -1, 0))]
        return freq / self.total_frequency

    def normalized(self) -> np.ndarray:
        self._check_total()
        return self.counts / self.total_frequency


def build_histogram(img, samples, bins):
    """
    :param img: image of shape (rows, cols, channels)
    :param samples: iterable of (row, col) coordinates
    :param bins: number of bins per channel
    :return: histogram of the pixel values found at the sample coordinates
    """
    coords = np.array(sorted(samples), dtype=np.int64).reshape(-1, 2)
    hist = Histogram(bins, img.shape[2])
    hist.add_samples(img[coords[:, 0], coords[:, 1]])
    logger.debug("Histogram built from %d samples (%d bins, %d channels)", hist.total_frequency, hist.bins, hist.channels)
    return hist
