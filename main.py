import sys

import image_graphcut as seg
from image_graphcut.gui.gui import Gui

if len(sys.argv) < 2:
	print("Usage: python main.py <image>")
	sys.exit(1)

engine = seg.ImageGraphCut(terminal_lambda=0.01, histogram_bins=10, verbose=True)

gui = Gui(engine)
gui.start(sys.argv[1])
