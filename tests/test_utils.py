"""Tests for the pixel and scribble helpers."""

import numpy as np
import pytest

from image_graphcut.errors import InvalidImage
from image_graphcut.utils import (BACKGROUND, FOREGROUND, FOREGROUND_VALUE, as_channel_image, find_scribbles,
                                  mask_to_rgb, pixel_difference)


def test_as_channel_image_shapes():
    gray = as_channel_image(np.zeros((4, 5), dtype=np.uint8))
    color = as_channel_image(np.zeros((4, 5, 3), dtype=np.uint8))
    assert gray.shape == (4, 5, 1)
    assert color.shape == (4, 5, 3)
    assert gray.dtype == np.float64


@pytest.mark.parametrize("image", [np.zeros(5), np.zeros((0, 3)), np.zeros((2, 2, 0)), np.full((2, 2), np.inf)])
def test_as_channel_image_rejects(image):
    with pytest.raises(InvalidImage):
        as_channel_image(image)


def test_pixel_difference():
    assert pixel_difference([0, 0, 0], [3, 4, 0]) == pytest.approx(5.)
    assert pixel_difference([10], [4]) == pytest.approx(6.)
    assert pixel_difference(np.zeros((2, 3, 2)), np.ones((2, 3, 2))).shape == (2, 3)


def test_find_scribbles():
    scribbles = np.zeros((4, 6, 3), dtype=np.uint8)
    scribbles[1, 2] = FOREGROUND
    scribbles[3, 5] = FOREGROUND
    scribbles[0, 0] = BACKGROUND
    scribbles[2, 2] = (10, 200, 10)

    sources, sinks = find_scribbles(scribbles)
    assert sources == {(1, 2), (3, 5)}
    assert sinks == {(0, 0)}


def test_find_scribbles_ignores_alpha():
    scribbles = np.zeros((2, 2, 4), dtype=np.uint8)
    scribbles[0, 1] = BACKGROUND + (255,)
    assert find_scribbles(scribbles) == (set(), {(0, 1)})


def test_mask_to_rgb():
    mask = np.array([[FOREGROUND_VALUE, 0]], dtype=np.uint8)
    rgb = mask_to_rgb(mask)
    assert rgb.shape == (1, 2, 3)
    assert tuple(rgb[0, 0]) == FOREGROUND
    assert tuple(rgb[0, 1]) == BACKGROUND
