"""
Concentric Progress Rings

ProgressCircle owns a set of Circle rings drawn on one surface and redraws
them on a repeating tick. Each ring pulls its progress (and optional info
text) from a query callable on every tick.
"""
import math
from dataclasses import dataclass
from typing import Callable, List, Optional

from .geometry import Point, info_line_points
from .render_target import RenderTarget
from .scheduler import ManualTicker, Ticker

# Rings start at 12 o'clock
ANGLE_OFFSET = -math.pi / 2


@dataclass(frozen=True)
class RingSpec:
    """Geometry and colours of one ring"""
    inner_radius: float
    arc_width: float
    fill_color: str = "#fff"
    outline_color: Optional[str] = None
    info_line_angle: float = 0.0

    @property
    def outer_radius(self) -> float:
        return self.inner_radius + self.arc_width

    @property
    def stroke_color(self) -> str:
        return self.outline_color or self.fill_color


def _no_progress() -> float:
    return 0.0


class Circle:
    """A single progress ring"""

    def __init__(self, spec: RingSpec, center: Point, surface: RenderTarget,
                 progress_source: Callable[[], float],
                 info_source: Optional[Callable[[], str]] = None,
                 info_line_length: float = 250, horiz_line_length: float = 50,
                 circle_id: int = 0):
        self.id = circle_id
        self.spec = spec
        self.center = center
        self.surface = surface
        self.progress_source = progress_source
        self.info_source = info_source
        self.info_line_length = info_line_length
        self.horiz_line_length = horiz_line_length

        self.progress = 0.0
        self.info: Optional[str] = None
        self.info_line = None
        self.label = None

        if self.info_source is None:
            return

        arc_distance = (spec.inner_radius + spec.outer_radius) / 2
        self.info_line = info_line_points(center, spec.info_line_angle, arc_distance,
                                          info_line_length, horiz_line_length)

        offset_x, _ = surface.absolute_position()
        self.label = surface.create_label(f"progress_circle_info_{self.id}", spec.fill_color)
        self.label.move(self.info_line.end.x + offset_x)

    def update(self):
        """Pull current values and redraw"""
        self.progress = self.progress_source()
        self._draw()

        if self.info_source is not None:
            self.info = self.info_source()
            self._draw_info()

    def _draw(self):
        spec = self.spec
        inner_radius = spec.inner_radius - spec.arc_width - 1
        outer_radius = spec.outer_radius - spec.arc_width - 1
        if inner_radius < 0:
            return

        start_angle = ANGLE_OFFSET
        end_angle = start_angle + self.progress * math.pi * 2
        self.surface.draw_annular_wedge(self.center, inner_radius, outer_radius,
                                        start_angle, end_angle,
                                        spec.fill_color, spec.stroke_color)

    def _draw_info(self):
        self.surface.draw_segments(self.info_line.points(), self.spec.stroke_color)

        self.label.set_text("" if self.info is None else str(self.info))

        # Label height follows its text and font, so re-centre every tick
        _, offset_y = self.surface.absolute_position()
        top = self.info_line.end.y + offset_y - self.label.height() / 2
        self.label.move(None, top)


class ProgressCircle:
    """Draw controller for concentric rings sharing one surface"""

    DEFAULT_INTERVAL = 33

    def __init__(self, surface: RenderTarget, min_radius: Optional[float] = None,
                 arc_width: Optional[float] = None, gap_width: Optional[float] = None,
                 center: Optional[Point] = None,
                 info_line_length: Optional[float] = None,
                 horiz_line_length: Optional[float] = None,
                 info_line_angle_interval: Optional[float] = None,
                 info_line_base_angle: Optional[float] = None,
                 ticker_factory: Callable[[Callable[[], None]], Ticker] = ManualTicker):
        self.surface = surface
        self.min_radius = 15 if min_radius is None else min_radius
        self.arc_width = 5 if arc_width is None else arc_width
        self.gap_width = 3 if gap_width is None else gap_width
        self.center = center or Point(surface.width / 2, surface.height / 2)
        self.info_line_length = 60 if info_line_length is None else info_line_length
        self.horiz_line_length = 10 if horiz_line_length is None else horiz_line_length
        self.info_line_angle_interval = (math.pi / 8 if info_line_angle_interval is None
                                         else info_line_angle_interval)
        self.info_line_base_angle = (math.pi / 6 if info_line_base_angle is None
                                     else info_line_base_angle)

        self.circles: List[Circle] = []
        self.ticker = ticker_factory(self._update)

    @property
    def running(self) -> bool:
        return self.ticker.running

    def add_entry(self, fill_color: str = "#fff", outline_color: Optional[str] = None,
                  progress_source: Callable[[], float] = None,
                  info_source: Optional[Callable[[], str]] = None) -> "ProgressCircle":
        """Append a ring outside the existing ones"""
        index = len(self.circles)
        spec = RingSpec(
            inner_radius=self.min_radius + index * (self.gap_width + self.arc_width),
            arc_width=self.arc_width,
            fill_color=fill_color or "#fff",
            outline_color=outline_color,
            info_line_angle=self.info_line_base_angle + index * self.info_line_angle_interval,
        )
        self.circles.append(Circle(
            spec, self.center, self.surface, progress_source or _no_progress, info_source,
            info_line_length=self.info_line_length,
            horiz_line_length=self.horiz_line_length,
            circle_id=index,
        ))
        return self

    def start(self, interval: Optional[int] = None) -> "ProgressCircle":
        self.ticker.start(interval or self.DEFAULT_INTERVAL)
        return self

    def stop(self):
        self.ticker.stop()

    def _update(self) -> "ProgressCircle":
        self.surface.clear()
        # Insertion order is z-order
        for circle in self.circles:
            circle.update()
        return self
