"""
Unit tests for progress rings and their tick loop
"""
import math
import pytest

from core.geometry import Point
from core.progress_circle import Circle, ProgressCircle, RingSpec
from core.render_target import RecordingSurface
from core.scheduler import ManualTicker


class Node:
    def __init__(self, left, top, parent=None):
        self.offset_left = left
        self.offset_top = top
        self.offset_parent = parent


def constant(value):
    return lambda: value


class TestRingLayout:
    """Test concentric ring geometry"""

    def test_second_ring_radius(self):
        """Second ring sits one gap plus one arc outside the first"""
        circle = ProgressCircle(RecordingSurface(), min_radius=15, arc_width=5, gap_width=3)
        circle.add_entry("#f00", progress_source=constant(0.5))
        circle.add_entry("#0f0", progress_source=constant(0.5))
        assert circle.circles[0].spec.inner_radius == 15
        assert circle.circles[1].spec.inner_radius == 23

    def test_rings_never_overlap(self):
        """Every ring starts beyond the previous ring's outer edge"""
        circle = ProgressCircle(RecordingSurface(), min_radius=10, arc_width=4, gap_width=2)
        for _ in range(6):
            circle.add_entry(progress_source=constant(0.1))
        for n, ring in enumerate(circle.circles):
            assert ring.spec.inner_radius == 10 + n * (2 + 4)
        for inner, outer in zip(circle.circles, circle.circles[1:]):
            assert outer.spec.inner_radius >= inner.spec.outer_radius

    def test_info_line_angles_fan_out(self):
        """Each ring's info line is one interval further round"""
        circle = ProgressCircle(RecordingSurface(), info_line_base_angle=0.5,
                                info_line_angle_interval=0.25)
        circle.add_entry(progress_source=constant(0)).add_entry(progress_source=constant(0))
        assert circle.circles[0].spec.info_line_angle == pytest.approx(0.5)
        assert circle.circles[1].spec.info_line_angle == pytest.approx(0.75)

    def test_defaults(self):
        """Unspecified geometry falls back to defaults and the surface centre"""
        circle = ProgressCircle(RecordingSurface(300, 200))
        assert circle.min_radius == 15
        assert circle.arc_width == 5
        assert circle.gap_width == 3
        assert circle.center == Point(150, 100)
        assert circle.info_line_base_angle == pytest.approx(math.pi / 6)
        assert circle.info_line_angle_interval == pytest.approx(math.pi / 8)

    def test_add_entry_chains(self):
        circle = ProgressCircle(RecordingSurface())
        assert circle.add_entry(progress_source=constant(0)) is circle

    def test_outline_defaults_to_fill(self):
        spec = RingSpec(inner_radius=10, arc_width=5, fill_color="#123456")
        assert spec.stroke_color == "#123456"
        assert spec.outer_radius == 15


class TestTicking:
    """Test start/stop and per-tick drawing"""

    def test_tick_clears_before_drawing(self):
        """The surface is cleared before any ring redraws"""
        surface = RecordingSurface()
        circle = ProgressCircle(surface, min_radius=50, arc_width=10)
        circle.add_entry("#f00", progress_source=constant(0.5))
        circle.add_entry("#0f0", progress_source=constant(0.25))
        circle.start()
        circle.ticker.fire()

        names = [op for op, _ in surface.operations]
        assert names == ["clear", "wedge", "wedge"]
        fills = [args[5] for args in surface.calls("wedge")]
        assert fills == ["#f00", "#0f0"]

    def test_wedge_geometry(self):
        """Radii are inset by arc width + 1 and the arc runs clockwise from the top"""
        surface = RecordingSurface(200, 200)
        circle = ProgressCircle(surface, min_radius=50, arc_width=10)
        circle.add_entry("#f00", "#000", progress_source=constant(0.5))
        circle.start()
        circle.ticker.fire()

        center, inner, outer, start, end, fill, outline = surface.calls("wedge")[0]
        assert center == Point(100, 100)
        assert inner == 39
        assert outer == 49
        assert start == pytest.approx(-math.pi / 2)
        assert end == pytest.approx(math.pi / 2)
        assert (fill, outline) == ("#f00", "#000")

    def test_degenerate_ring_skipped(self):
        """A negative inset radius skips the arc without error"""
        surface = RecordingSurface()
        circle = ProgressCircle(surface, min_radius=3, arc_width=5)
        circle.add_entry(progress_source=constant(1.0))
        circle.start()
        circle.ticker.fire()
        assert surface.frames == 1
        assert surface.calls("wedge") == []

    def test_default_interval(self):
        circle = ProgressCircle(RecordingSurface())
        circle.start()
        assert circle.ticker.interval_ms == 33
        circle.start(10)
        assert circle.ticker.interval_ms == 10
        assert circle.running

    def test_stop_before_first_tick(self):
        """Stopping right after start leaves the surface untouched"""
        surface = RecordingSurface()
        circle = ProgressCircle(surface)
        circle.add_entry(progress_source=constant(0.5))
        circle.start()
        circle.stop()
        assert circle.ticker.fire() is False
        assert surface.operations == []

    def test_stop_is_idempotent(self):
        """Stopping twice, or before starting, is harmless"""
        surface = RecordingSurface()
        circle = ProgressCircle(surface)
        circle.stop()
        circle.start()
        circle.ticker.fire()
        circle.stop()
        circle.stop()
        assert circle.ticker.advance(5) == 0
        assert surface.frames == 1

    def test_uses_ticker_factory(self):
        created = []

        def factory(callback):
            ticker = ManualTicker(callback)
            created.append(ticker)
            return ticker

        circle = ProgressCircle(RecordingSurface(), ticker_factory=factory)
        assert created == [circle.ticker]


class TestInfoLabel:
    """Test the optional info line and label"""

    def test_no_label_without_info_source(self):
        surface = RecordingSurface()
        circle = ProgressCircle(surface)
        circle.add_entry(progress_source=constant(0.5))
        assert surface.labels == {}
        assert circle.circles[0].info_line is None

    def test_label_position_and_text(self):
        """Label left is fixed; its top is centred on the line end every tick"""
        body = Node(0, 0)
        surface = RecordingSurface(200, 200, offset_left=30, offset_top=40, offset_parent=body)
        ring = Circle(RingSpec(inner_radius=50, arc_width=10, fill_color="#abc",
                               info_line_angle=math.pi / 2),
                      Point(100, 100), surface, constant(0.3), constant("30 tasks"),
                      info_line_length=80, horiz_line_length=10, circle_id=4)

        label = surface.labels["progress_circle_info_4"]
        assert label.color == "#abc"
        assert label.x == pytest.approx(100 + 80 + 10 + 30)
        assert label.y is None

        ring.update()
        assert label.text == "30 tasks"
        assert label.y == pytest.approx(100 + 40 - label.height() / 2)
        points, color, close = surface.calls("segments")[0]
        assert len(points) == 3
        assert points[0].x == pytest.approx(155)
        assert close is False
