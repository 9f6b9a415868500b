import argparse
import logging
import os
import sys

import cv2

from image_graphcut.errors import SegmentationError
from image_graphcut.graphcut.image_graph_cut import ImageGraphCut
from image_graphcut.utils import as_channel_image, find_scribbles

logger = logging.getLogger(__name__)


def load_image(path):
    """
    :return: grayscale (rows, cols) or RGB (rows, cols, 3) uint8 array
    """
    img = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if img is None:
        raise FileNotFoundError("Could not read image " + path)
    if img.ndim == 3 and img.shape[2] == 4:
        img = cv2.cvtColor(img, cv2.COLOR_BGRA2RGB)
    elif img.ndim == 3:
        img = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    return img


def load_seeds(path):
    """
    Reads a scribble image: black everywhere, blue (foreground) and red (background) strokes
    :return: sources and sinks coordinates
    """
    scribbles = cv2.imread(path, cv2.IMREAD_COLOR)
    if scribbles is None:
        raise FileNotFoundError("Could not read scribbles " + path)
    return find_scribbles(cv2.cvtColor(scribbles, cv2.COLOR_BGR2RGB))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Foreground/background segmentation of an image from scribbles, with a graph cut")
    parser.add_argument("image", help="image to segment")
    parser.add_argument("scribbles", nargs="?", help="scribble image: blue strokes on the foreground, red on the background")
    parser.add_argument("-o", "--output", help="mask to write (default: <image>_mask.png)")
    parser.add_argument("--lambda", dest="terminal_lambda", type=float, default=0.01, help="weight of the data term")
    parser.add_argument("--bins", type=int, default=10, help="histogram bins per channel")
    parser.add_argument("--plot", action="store_true", help="show the histograms and terminal weights")
    parser.add_argument("--gui", action="store_true", help="paint the scribbles in a window instead")
    parser.add_argument("--verbose", action="store_true", help="show progress bars")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)
    if not args.gui and args.scribbles is None:
        parser.error("a scribble image is required unless --gui is given")
    return args


def plot(image, sources, sinks, engine):
    import matplotlib.pyplot as plt
    from image_graphcut.image_processing.plotting import plot_histograms, plot_terminal_weights
    from image_graphcut.image_processing.weights import Weights

    weights = Weights(engine.terminal_lambda, engine.histogram_bins)
    weights.compute_weights(as_channel_image(image), sources, sinks)
    plot_histograms(weights.fg_histogram, weights.bg_histogram)
    plot_terminal_weights(weights)
    plt.show()


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        engine = ImageGraphCut(terminal_lambda=args.terminal_lambda, histogram_bins=args.bins, verbose=args.verbose)
    except ValueError as e:
        logger.error("%s", e)
        return 2

    if args.gui:
        from image_graphcut.gui.gui import Gui
        Gui(engine).start(args.image)
        return 0

    image = load_image(args.image)
    sources, sinks = load_seeds(args.scribbles)
    engine.set_seeds(sources, sinks)

    try:
        mask = engine.run(image)
    except SegmentationError as e:
        logger.error("Segmentation failed: %s", e)
        return 1

    if args.plot:
        plot(image, sources, sinks, engine)

    output = args.output or os.path.splitext(args.image)[0] + "_mask.png"
    cv2.imwrite(output, mask)
    print("Mask written to " + output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
