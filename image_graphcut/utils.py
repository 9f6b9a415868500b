import numpy as np

from image_graphcut.errors import InvalidImage

# Scribble colours (RGB)
FOREGROUND = (0, 0, 255)  # blue
BACKGROUND = (255, 0, 0)  # red
FOREGROUND_RGBA = FOREGROUND + (255,)
BACKGROUND_RGBA = BACKGROUND + (255,)

# Output mask values
FOREGROUND_VALUE = 255
BACKGROUND_VALUE = 0

# Right and bottom neighbours only, so that each undirected pair is visited once
FORWARD_NEIGHBOURS = [(0, 1), (1, 0)]


def as_channel_image(image) -> np.ndarray:
    """
    :param image: array of shape (rows, cols) or (rows, cols, channels)
    :return: float64 array of shape (rows, cols, channels)
    """
    img = np.asarray(image, dtype=np.float64)
    if img.ndim == 2:
        img = img[:, :, np.newaxis]
    if img.ndim != 3 or img.shape[2] < 1:
        raise InvalidImage("Expected an image of shape (rows, cols) or (rows, cols, channels), got " + str(np.shape(image)))
    if img.shape[0] == 0 or img.shape[1] == 0:
        raise InvalidImage("Image is empty")
    if not np.all(np.isfinite(img)):
        raise InvalidImage("Image contains non-finite values")
    return img


def pixel_difference(a, b):
    """
    Euclidean distance between pixel vectors, over the last axis
    """
    diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return np.sqrt(np.sum(diff ** 2, axis=-1))


def forward_differences(img):
    """
    :param img: (rows, cols, channels) float image
    :return: distances to the right neighbour (rows, cols - 1) and to the neighbour below (rows - 1, cols)
    """
    hori = pixel_difference(img[:, 1:], img[:, :-1])
    vert = pixel_difference(img[1:, :], img[:-1, :])
    return hori, vert


def find_scribbles(scribble_img):
    """
    :param scribble_img: numpy array of shape (w, h, 3) with black everywhere and blue/red where scribbles
    :return: two sets of coordinates, foreground (blue) and background (red) scribbled pixels
    """
    rgb = np.asarray(scribble_img)[:, :, :3]
    fg = np.where(np.all(rgb == FOREGROUND, axis=-1))
    bg = np.where(np.all(rgb == BACKGROUND, axis=-1))
    sources = set(zip(fg[0].tolist(), fg[1].tolist()))
    sinks = set(zip(bg[0].tolist(), bg[1].tolist()))
    return sources, sinks


def mask_to_rgb(mask):
    """
    :param mask: segmentation mask, FOREGROUND_VALUE where foreground
    :return: image with blue on the foreground and red on the background
    """
    is_fg = np.asarray(mask) == FOREGROUND_VALUE
    img = np.zeros(is_fg.shape + (3,), dtype=np.uint8)
    img[is_fg] = FOREGROUND
    img[~is_fg] = BACKGROUND
    return img
