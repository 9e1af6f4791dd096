from __future__ import annotations


class DrawingAreaError(Exception):
    """Base class for every failure raised by drawing areas and charts."""


class BackendError(DrawingAreaError):
    """A backend failed while drawing, presenting or handling a context."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"backend failure: {cause}")
        self.cause = cause


class CoreError(DrawingAreaError):
    pass


class LayoutError(CoreError):
    """Zero-size or otherwise unusable drawing area."""


class CoordSpecError(CoreError):
    """Misconfigured coordinate spec (empty categories, bad log range...)."""


class UnbalancedContextError(CoreError):
    """`end_context` was called with no open context."""


class SeriesDataError(ValueError):
    """Series input that cannot be turned into guest points."""
