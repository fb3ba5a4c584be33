"""Exceptions raised by cutword."""


class CutwordError(Exception):
    """Base class for cutword errors."""
    pass


class DictionaryNotLoadedError(CutwordError, RuntimeError):
    """Raised when segmenting before a dictionary has been loaded."""
    pass


class SegmentationTimeoutError(CutwordError):
    """Raised when async segmentation times out."""
    pass
