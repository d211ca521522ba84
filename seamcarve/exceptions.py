"""Exception hierarchy for seamcarve."""


class SeamCarveError(Exception):
    """Base exception for all seamcarve errors."""


class LoadError(SeamCarveError):
    """Raised when an input image cannot be decoded."""


class MaskLoadError(LoadError):
    """Raised when a mask cannot be decoded.

    Never fatal: the loader logs it and carries on without the mask.
    """


class InvalidTargetSize(SeamCarveError, ValueError):
    """Raised when a requested width or height is below 1."""


class SaveError(SeamCarveError):
    """Raised when the result cannot be encoded or written."""


class DetectionError(SeamCarveError):
    """Raised when the face detector cannot be initialised."""
