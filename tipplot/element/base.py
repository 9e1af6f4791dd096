from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Sequence

from tipplot.backend import BackendCoord


class Drawable(ABC):
    """Something that yields guest points and renders itself from their mapped pixels.

    ``points`` must return a fresh iterable on every call; drawing areas and
    chart contexts may walk it more than once. ``draw`` receives the mapped
    backend coordinates in the same order, a backend-like canvas clipped to the
    target area and the area's ``(width, height)``.
    """

    @abstractmethod
    def points(self) -> Iterable[Any]:
        ...

    @abstractmethod
    def draw(self, points: Sequence[BackendCoord], backend: Any, parent_dim: tuple[int, int]) -> None:
        ...
