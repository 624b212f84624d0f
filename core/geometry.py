"""
Geometry helpers for ring layout and label placement
"""
import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point:
    """A 2D point in surface pixels"""
    x: float
    y: float


@dataclass(frozen=True)
class InfoLine:
    """Three points of a leader line: arc midpoint, radial bend, label anchor"""
    start: Point
    mid: Point
    end: Point

    def points(self):
        return [self.start, self.mid, self.end]


def absolute_position(element) -> Tuple[float, float]:
    """
    Cumulative offset of an element from the document origin.

    Walks the offset-parent chain, summing ``offset_left``/``offset_top``
    of the element and each ancestor. An element without an offset parent
    is at (0, 0).
    """
    left = top = 0
    if getattr(element, "offset_parent", None) is None:
        return left, top
    while element is not None:
        left += element.offset_left
        top += element.offset_top
        element = element.offset_parent
    return left, top


def info_line_points(center: Point, angle: float, arc_distance: float,
                     info_line_length: float, horiz_line_length: float) -> InfoLine:
    """Leader line from the arc outward, then horizontally left or right"""
    sin_a = math.sin(angle)
    cos_a = math.cos(angle)

    start = Point(center.x + sin_a * arc_distance, center.y - cos_a * arc_distance)
    mid = Point(center.x + sin_a * info_line_length, center.y - cos_a * info_line_length)
    # Labels on the left half fan out to the left
    end = Point(mid.x + (-horiz_line_length if sin_a < 0 else horiz_line_length), mid.y)
    return InfoLine(start=start, mid=mid, end=end)


def reached_waypoint(element_top: float, scroll_top: float, viewport_height: float,
                     offset: float = 0.85) -> bool:
    """True once the element's top has scrolled to `offset` of the viewport"""
    return element_top - scroll_top <= viewport_height * offset
