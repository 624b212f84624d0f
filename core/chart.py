"""
Animated Pie Chart

Binds one host element to one ProgressCircle. The chart reads its
configuration from the host's data attributes, animates a single ring from
0 to the target and keeps the host's value label in step with each tick.
"""
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .colors import DEFAULT_COLORS, resolve_color
from .progress_circle import ProgressCircle
from .render_target import RenderTarget
from .scheduler import ManualTicker, Ticker

READY_CLASS = "vc_ready"
PROGRESS_STEP = 0.01
ANIMATION_INTERVAL = 10
WAYPOINT_OFFSET = 0.85


class ChartState(Enum):
    """Pie chart lifecycle"""
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    ANIMATING = "animating"
    COMPLETE = "complete"


def coerce_data_value(raw: Any) -> Any:
    """Convert a data-attribute string the way jQuery's .data() does"""
    if not isinstance(raw, str):
        return raw
    if raw == "true":
        return True
    if raw == "false":
        return False
    if raw == "null":
        return None
    try:
        number = float(raw)
    except ValueError:
        return raw
    if not math.isfinite(number):
        return raw
    if number.is_integer():
        number = int(number)
    # Only strings that read back unchanged become numbers
    return number if str(number) == raw else raw


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def clamp_percent(value: Any) -> float:
    """Limit a pie value to 0..100; anything non-numeric counts as 0"""
    if not is_numeric(value):
        return 0
    return min(max(float(value), 0), 100)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class ChartAttributes:
    """Host data attributes consumed once at construction"""
    value: float = 0
    label_value: Any = None
    width: Optional[float] = None
    color: Optional[str] = None
    units: Optional[str] = None

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> "ChartAttributes":
        value = clamp_percent(coerce_data_value(data.get("pie-value")))
        if value == int(value):
            value = int(value)
        label_value = coerce_data_value(data.get("pie-label-value"))
        width = coerce_data_value(data.get("pie-width"))
        return cls(
            value=value,
            label_value=label_value or value,
            width=float(width) if is_numeric(width) else None,
            color=data.get("pie-color"),
            units=data.get("pie-units"),
        )


class ChartHost(ABC):
    """The element a pie chart lives in"""

    data: Mapping[str, Any] = {}
    chart = None

    @abstractmethod
    def width(self) -> float:
        """Rendered width; 0 while the element is not laid out"""

    @abstractmethod
    def visible_ancestor_width(self) -> float:
        """Width of the nearest visible ancestor"""

    @abstractmethod
    def is_visible(self) -> bool:
        pass

    @abstractmethod
    def is_ready(self) -> bool:
        """True once marked with the ready class"""

    @abstractmethod
    def mark_ready(self):
        pass

    @abstractmethod
    def layout(self, size: float):
        """Size the wrapper, value label and backdrop to `size` pixels"""

    @abstractmethod
    def prepare_canvas(self, size: float) -> RenderTarget:
        """Resize the canvas to size x size and return it as a render target"""

    @abstractmethod
    def set_label_text(self, text: str):
        pass

    @abstractmethod
    def on_resize(self, callback: Callable[[], None]):
        """Call `callback` whenever the viewport is resized"""


class PieChart:
    """Animated pie chart state machine"""

    def __init__(self, host: ChartHost, color: Optional[str] = None, units: Optional[str] = "",
                 responsive: bool = True, palette: Optional[Dict[str, str]] = None,
                 waypoint=None, is_mobile: bool = False,
                 ticker_factory: Callable[[Callable[[], None]], Ticker] = ManualTicker,
                 pixel_ratio: float = 2):
        self.host = host
        self.units = units or ""
        self.responsive = responsive
        self.palette = DEFAULT_COLORS if palette is None else palette
        self.waypoint = waypoint
        self.is_mobile = is_mobile
        self.ticker_factory = ticker_factory
        self.pixel_ratio = pixel_ratio

        self.state = ChartState.UNINITIALIZED
        self.animated = False
        self.progress = 0.0
        self.circle: Optional[ProgressCircle] = None
        self.radius = 0.0

        self.color = resolve_color(color, self.palette)
        attributes = ChartAttributes.from_data(host.data)
        self.value = attributes.value / 100
        self.label_value = attributes.label_value
        self.arc_width = attributes.width * 2 if attributes.width is not None else None

        self.draw()
        self.set_waypoint()
        if self.responsive:
            self.set_responsive()
        if self.is_mobile:
            self.progress = self.value

    def set_responsive(self):
        if not self.is_mobile:
            self.host.on_resize(self.on_resize)

    def draw(self):
        """Build a fresh ProgressCircle sized to the host"""
        w = self.host.width() * self.pixel_ratio
        if not w:
            w = self.host.visible_ancestor_width() - 2
        self.radius = w / 2

        self.host.layout(w / self.pixel_ratio)
        surface = self.host.prepare_canvas(w)
        self.host.mark_ready()
        self.circle = ProgressCircle(surface, min_radius=self.radius,
                                     arc_width=self.arc_width,
                                     ticker_factory=self.ticker_factory)
        if self.state == ChartState.UNINITIALIZED:
            self.state = ChartState.READY

    def on_resize(self):
        """Rebuild the geometry; a started animation replays from 0"""
        started = self.state in (ChartState.ANIMATING, ChartState.COMPLETE)
        if self.circle is not None:
            self.circle.stop()
        self.draw()
        if started:
            self.progress = 0.0
            self.animated = False
            self.state = ChartState.READY
            self.animate()

    def set_progress(self) -> float:
        """Progress source of the chart ring; advances one step per tick"""
        if self.progress >= self.value:
            self.circle.stop()
            self.animated = True
            self.state = ChartState.COMPLETE
            self.progress = min(self.progress, self.value)
            self.host.set_label_text(f"{self.label_value}{self.units}")
            return self.progress

        self.progress = min(self.progress + PROGRESS_STEP, self.value)
        if is_numeric(self.label_value):
            shown = round_half_up(self.progress / self.value * float(self.label_value))
            self.host.set_label_text(f"{shown}{self.units}")
        else:
            self.host.set_label_text(f"{self.label_value}{self.units}")
        return self.progress

    def animate(self):
        if self.animated or self.state == ChartState.ANIMATING:
            return
        self.circle.add_entry(fill_color=self.color,
                              progress_source=self.set_progress).start(ANIMATION_INTERVAL)
        self.state = ChartState.ANIMATING

    def set_waypoint(self):
        if self.waypoint is not None and not self.is_mobile:
            self.waypoint.watch(self.host, self.animate, offset=WAYPOINT_OFFSET)
        else:
            self.animate()


def init_pie_charts(hosts: Iterable[ChartHost], **options) -> List[PieChart]:
    """Create charts for visible hosts not yet marked ready"""
    charts = []
    for host in hosts:
        if host.is_ready() or not host.is_visible():
            continue
        chart_options = dict(options)
        chart_options.setdefault("color", host.data.get("pie-color"))
        chart_options.setdefault("units", host.data.get("pie-units"))
        chart = PieChart(host, **chart_options)
        host.chart = chart
        charts.append(chart)
    return charts
