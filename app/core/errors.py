# app/core/errors.py
"""Exceptions raised by the die-cut service layer."""


class DieCutError(Exception):
    """Base class for failures the API maps to a client-facing status."""


class InvalidImageError(DieCutError, ValueError):
    """The supplied file or URL did not yield a usable raster image."""

    def __init__(self, message: str, unsupported_type: bool = False):
        super().__init__(message)
        self.unsupported_type = unsupported_type


class BackgroundRemovalError(DieCutError, RuntimeError):
    """The background removal model failed to produce a matte."""


class NoSubjectFoundError(DieCutError):
    """Background removal succeeded but left no opaque subject behind."""


class InvalidRequestError(DieCutError, ValueError):
    """A request option (such as the background colour) was not understood."""
