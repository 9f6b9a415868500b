class SegmentationError(Exception):
    """
    Base class of every error a segmentation run can end with.
    The run leaves no partial mask behind when one of these is raised.
    """


class EmptySeedSet(SegmentationError):
    def __init__(self, empty_sets):
        self.empty_sets = tuple(empty_sets)
        super().__init__("At least one source (foreground) pixel and one sink (background) pixel must be "
                         "specified (empty: " + ", ".join(self.empty_sets) + ")")


class OutOfBoundsSeed(SegmentationError):
    def __init__(self, coordinate, shape):
        self.coordinate = coordinate
        self.shape = shape
        super().__init__("Seed {} lies outside of the image ({} rows, {} columns)".format(coordinate, *shape))


class OverlappingSeeds(SegmentationError):
    def __init__(self, coordinates):
        self.coordinates = sorted(coordinates)
        super().__init__("{} pixel(s) are marked both foreground and background, first one is {}"
                         .format(len(self.coordinates), self.coordinates[0]))


class InvalidImage(SegmentationError):
    pass


class DegenerateHistogram(SegmentationError):
    pass


class SolverFailure(SegmentationError):
    pass
