"""
Render Target Interface

Drawing surfaces the progress rings paint on. The ring and chart logic only
talks to these interfaces, so it runs the same against the Qt canvas and
the in-memory RecordingSurface.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from .geometry import Point, absolute_position


class Label(ABC):
    """An absolutely positioned text label owned by a surface"""

    @abstractmethod
    def set_text(self, text: str):
        pass

    @abstractmethod
    def height(self) -> float:
        """Rendered height, which depends on text and font"""

    @abstractmethod
    def move(self, x: float, y: Optional[float] = None):
        """Move the label; a None coordinate keeps its current value"""


class RenderTarget(ABC):
    """Drawing surface shared by all circles of a ProgressCircle"""

    # Offset chain used for absolute label positioning
    offset_left = 0
    offset_top = 0
    offset_parent = None

    @property
    @abstractmethod
    def width(self) -> float:
        pass

    @property
    @abstractmethod
    def height(self) -> float:
        pass

    @abstractmethod
    def clear(self):
        """Erase the whole surface"""

    @abstractmethod
    def draw_annular_wedge(self, center: Point, inner_radius: float, outer_radius: float,
                           start_angle: float, end_angle: float,
                           fill_color: str, outline_color: str):
        """Fill and stroke the ring segment between two radii, clockwise"""

    @abstractmethod
    def draw_segments(self, points: Sequence[Point], color: str, close: bool = False):
        """Stroke a polyline through the given points"""

    @abstractmethod
    def create_label(self, label_id: str, color: str) -> Label:
        pass

    def absolute_position(self) -> Tuple[float, float]:
        return absolute_position(self)


class RecordedLabel(Label):
    """Label kept in memory, with a fixed line height"""

    def __init__(self, label_id: str, color: str, line_height: float = 20.0):
        self.label_id = label_id
        self.color = color
        self.line_height = line_height
        self.text = ""
        self.x: Optional[float] = None
        self.y: Optional[float] = None

    def set_text(self, text: str):
        self.text = text

    def height(self) -> float:
        return self.line_height

    def move(self, x: float, y: Optional[float] = None):
        if x is not None:
            self.x = x
        if y is not None:
            self.y = y


class RecordingSurface(RenderTarget):
    """
    Headless render target that records every drawing call.

    ``operations`` holds ``(name, args)`` tuples in call order; ``frames``
    counts clears, i.e. ticks that reached the surface.
    """

    def __init__(self, width: float = 200, height: float = 200,
                 offset_left: float = 0, offset_top: float = 0, offset_parent=None):
        self._width = width
        self._height = height
        self.offset_left = offset_left
        self.offset_top = offset_top
        self.offset_parent = offset_parent
        self.operations: List[Tuple[str, tuple]] = []
        self.labels: Dict[str, RecordedLabel] = {}
        self.frames = 0

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def clear(self):
        self.frames += 1
        self.operations.append(("clear", ()))

    def draw_annular_wedge(self, center, inner_radius, outer_radius,
                           start_angle, end_angle, fill_color, outline_color):
        self.operations.append(("wedge", (center, inner_radius, outer_radius,
                                          start_angle, end_angle, fill_color, outline_color)))

    def draw_segments(self, points, color, close=False):
        self.operations.append(("segments", (tuple(points), color, close)))

    def create_label(self, label_id: str, color: str) -> Label:
        label = RecordedLabel(label_id, color)
        self.labels[label_id] = label
        return label

    def calls(self, name: str) -> list:
        """Arguments of every recorded call with the given name"""
        return [args for op, args in self.operations if op == name]
