"""Drawable objects produced by drawing commands.

A drawable knows how to break itself into primitive shapes for a rendering
backend, and has a canonical text form used for deduplication and display.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from .ast import format_number
from .errors import FunctionEvaluateError


Coordinates = Tuple[float, float]


def format_coordinates(c: Coordinates) -> str:
    return f"({format_number(c[0])}, {format_number(c[1])})"


@dataclass(frozen=True)
class PointShape:
    x: float
    y: float

    def __str__(self) -> str:
        return f"node{format_coordinates((self.x, self.y))}"


@dataclass(frozen=True)
class LineShape:
    start: Coordinates
    end: Coordinates

    def __str__(self) -> str:
        return f"line{format_coordinates(self.start)}{format_coordinates(self.end)}"


Shape = Union[PointShape, LineShape]


class Drawable(ABC):
    @abstractmethod
    def draw(self) -> List[Shape]:
        pass

    @abstractmethod
    def canonical(self) -> str:
        pass

    def __str__(self) -> str:
        return self.canonical()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.canonical()}>"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Drawable):
            return NotImplemented
        return self.canonical() == other.canonical()

    def __hash__(self) -> int:
        return hash(self.canonical())


class Point(Drawable):
    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y

    def draw(self) -> List[Shape]:
        return [PointShape(self.x, self.y)]

    def canonical(self) -> str:
        return f"point{format_coordinates((self.x, self.y))}"


class Segment(Drawable):
    def __init__(self, start: Coordinates, end: Coordinates):
        self.start = start
        self.end = end

    def draw(self) -> List[Shape]:
        return [LineShape(self.start, self.end)]

    def canonical(self) -> str:
        return f"line{format_coordinates(self.start)}{format_coordinates(self.end)}"


def pair_up(name: str, values: Sequence[float], minimum: int) -> List[Coordinates]:
    """Group a flat number sequence into coordinate pairs."""
    if len(values) % 2:
        raise FunctionEvaluateError(
            f"{name} expects coordinate pairs, got {len(values)} numbers")

    points = [(values[i], values[i + 1]) for i in range(0, len(values), 2)]
    if len(points) < minimum:
        raise FunctionEvaluateError(
            f"{name} needs at least {minimum} points, got {len(points)}")
    return points


class Path(Drawable):
    keyword = "path"

    def __init__(self, points: Sequence[Coordinates]):
        self.points = list(points)

    def _edges(self) -> List[Tuple[Coordinates, Coordinates]]:
        return list(zip(self.points, self.points[1:]))

    def draw(self) -> List[Shape]:
        return [LineShape(a, b) for a, b in self._edges()]

    def canonical(self) -> str:
        coords = ', '.join(f"{format_number(x)}, {format_number(y)}" for x, y in self.points)
        return f"{self.keyword}({coords})"


class Polygon(Path):
    keyword = "polygon"

    def _edges(self) -> List[Tuple[Coordinates, Coordinates]]:
        return super()._edges() + [(self.points[-1], self.points[0])]
