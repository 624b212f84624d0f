"""
Unit tests for the animated pie chart state machine
"""
import pytest

from core.chart import (ChartAttributes, ChartState, PieChart, coerce_data_value,
                        init_pie_charts, is_numeric, round_half_up)
from core.colors import DEFAULT_FILL


def run(chart):
    """Tick the chart's ring until its timer stops"""
    return chart.circle.ticker.run_until_stopped()


class TestDataAttributes:
    """Test host attribute parsing"""

    def test_coerce_numbers(self):
        assert coerce_data_value("75") == 75
        assert coerce_data_value("0.5") == 0.5
        assert coerce_data_value("Projects") == "Projects"
        assert coerce_data_value("true") is True
        assert coerce_data_value(40) == 40

    def test_coerce_keeps_strings_that_do_not_read_back(self):
        """Only strings equal to the printed number are converted"""
        assert coerce_data_value("1e2") == "1e2"
        assert coerce_data_value("1.50") == "1.50"
        assert coerce_data_value("007") == "007"
        assert coerce_data_value("-3") == -3
        assert coerce_data_value("Infinity") == "Infinity"
        assert coerce_data_value("nan") == "nan"

    def test_value_limited_to_percent_range(self):
        assert ChartAttributes.from_data({"pie-value": 150}).value == 100
        assert ChartAttributes.from_data({"pie-value": "-20"}).value == 0
        assert ChartAttributes.from_data({"pie-value": "Infinity"}).value == 0
        assert ChartAttributes.from_data({"pie-value": float("inf")}).value == 0
        assert ChartAttributes.from_data({"pie-value": float("nan")}).value == 0

    def test_label_falls_back_to_value(self):
        attributes = ChartAttributes.from_data({"pie-value": "60"})
        assert attributes.value == 60
        assert attributes.label_value == 60
        assert attributes.width is None

    def test_explicit_label(self):
        attributes = ChartAttributes.from_data({"pie-value": 40, "pie-label-value": "Projects",
                                                "pie-width": "6"})
        assert attributes.label_value == "Projects"
        assert attributes.width == 6

    def test_numeric_helpers(self):
        assert is_numeric(3) and is_numeric("12")
        assert not is_numeric("Projects")
        assert not is_numeric(None)
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4) == 2


class TestConstruction:
    """Test Uninitialized -> Ready"""

    def test_geometry_from_host_width(self, make_host):
        """Canvas is host width times pixel ratio; radius is half of it"""
        host = make_host({"pie-value": 75, "pie-width": 6}, width=100)
        chart = PieChart(host, waypoint=None)
        assert chart.radius == 100
        assert chart.circle.min_radius == 100
        assert chart.circle.arc_width == 12
        assert host.surfaces[-1].width == 200
        assert host.layout_sizes == [100]
        assert host.is_ready()

    def test_zero_width_uses_visible_ancestor(self, make_host):
        host = make_host({"pie-value": 50}, width=0, ancestor_width=302)
        chart = PieChart(host)
        assert chart.radius == 150
        assert chart.circle.arc_width == 5

    def test_color_resolution(self, make_host):
        assert PieChart(make_host({"pie-value": 1})).color == DEFAULT_FILL
        named = PieChart(make_host({"pie-value": 1}), color="btn-primary")
        assert named.color == "rgba(0, 136, 204, 1)"
        custom = PieChart(make_host({"pie-value": 1}), color="#336699")
        assert custom.color == "#336699"

    def test_injected_palette(self, make_host):
        chart = PieChart(make_host({"pie-value": 1}), color="brand", palette={"brand": "#010203"})
        assert chart.color == "#010203"

    def test_waypoint_defers_animation(self, make_host, waypoint):
        """With a visibility trigger the chart waits in Ready"""
        host = make_host({"pie-value": 75})
        chart = PieChart(host, waypoint=waypoint)
        assert chart.state == ChartState.READY
        assert chart.circle.circles == []
        assert waypoint.watched[0][2] == 0.85

        waypoint.trigger()
        assert chart.state == ChartState.ANIMATING
        assert chart.circle.ticker.interval_ms == 10

    def test_no_waypoint_animates_immediately(self, make_host):
        chart = PieChart(make_host({"pie-value": 75}))
        assert chart.state == ChartState.ANIMATING
        assert chart.progress == 0

    def test_mobile_snaps_to_target(self, make_host, waypoint):
        """On mobile the waypoint is bypassed and the first tick completes"""
        host = make_host({"pie-value": 75})
        chart = PieChart(host, units="%", waypoint=waypoint, is_mobile=True)
        assert waypoint.watched == []
        assert host.resize_callbacks == []
        assert chart.progress == pytest.approx(0.75)

        assert run(chart) == 1
        assert chart.state == ChartState.COMPLETE
        assert host.label_text == "75%"


class TestAnimation:
    """Test the per-tick progress callback"""

    def test_numeric_label_completes(self, make_host):
        """Target 75 with label 75 and units % ends on '75%'"""
        host = make_host({"pie-value": 75, "pie-label-value": 75})
        chart = PieChart(host, units="%")
        run(chart)
        assert chart.animated is True
        assert chart.state == ChartState.COMPLETE
        assert host.label_text == "75%"
        assert not chart.circle.running

    def test_literal_label_every_tick(self, make_host):
        """A non-numeric label is shown unchanged on every tick"""
        host = make_host({"pie-value": 40, "pie-label-value": "Projects"})
        chart = PieChart(host, units="")
        ticks = run(chart)
        assert ticks > 1
        assert set(host.label_history) == {"Projects"}

    def test_label_scales_with_progress(self, make_host):
        host = make_host({"pie-value": 50, "pie-label-value": 200})
        chart = PieChart(host, units=" pts")
        chart.circle.ticker.fire()
        assert host.label_text == "4 pts"

    def test_progress_is_monotonic(self, make_host):
        """Progress never decreases and never passes the target"""
        host = make_host({"pie-value": 33})
        chart = PieChart(host)
        seen = []
        source = chart.circle.circles[0].progress_source

        def recording_source():
            value = source()
            seen.append(value)
            return value

        chart.circle.circles[0].progress_source = recording_source
        run(chart)
        assert seen == sorted(seen)
        assert max(seen) <= 0.33
        assert seen[-1] == pytest.approx(0.33)

    def test_value_over_hundred_stops_at_full_circle(self, make_host):
        host = make_host({"pie-value": 150})
        chart = PieChart(host, units="%")
        run(chart)
        assert chart.value == 1
        assert chart.progress == 1
        assert host.label_text == "100%"

    def test_non_finite_value_animates_as_zero(self, make_host):
        host = make_host({"pie-value": "Infinity", "pie-label-value": "Infinity"})
        chart = PieChart(host)
        assert run(chart) == 1
        assert chart.state == ChartState.COMPLETE
        assert host.label_text == "Infinity"

    def test_zero_target_completes_on_first_tick(self, make_host):
        host = make_host({"pie-value": 0})
        chart = PieChart(host, units="%")
        assert run(chart) == 1
        assert chart.progress == 0
        assert chart.state == ChartState.COMPLETE
        assert host.label_text == "0%"

    def test_animate_is_latched(self, make_host):
        """animate() never adds a second ring"""
        chart = PieChart(make_host({"pie-value": 20}))
        chart.animate()
        assert len(chart.circle.circles) == 1
        run(chart)
        chart.animate()
        assert len(chart.circle.circles) == 1
        assert not chart.circle.running


class TestResponsiveResize:
    """Test resize-triggered reconstruction"""

    def test_resize_while_animating_restarts(self, make_host):
        host = make_host({"pie-value": 80}, width=100)
        chart = PieChart(host)
        old_circle = chart.circle
        old_circle.ticker.advance(10)
        assert chart.progress == pytest.approx(0.10)

        host.resize(60)
        assert not old_circle.running
        assert chart.circle is not old_circle
        assert chart.radius == 60
        assert chart.circle.min_radius == host.surfaces[-1].width / 2
        assert chart.progress == 0
        assert chart.state == ChartState.ANIMATING
        assert chart.circle.running
        assert len(chart.circle.circles) == 1

    def test_resize_after_complete_replays(self, make_host):
        host = make_host({"pie-value": 30}, width=100)
        chart = PieChart(host, units="%")
        run(chart)
        host.resize(80)
        assert chart.animated is False
        assert chart.state == ChartState.ANIMATING
        run(chart)
        assert host.label_text == "30%"

    def test_resize_while_ready_stays_ready(self, make_host, waypoint):
        host = make_host({"pie-value": 30}, width=100)
        chart = PieChart(host, waypoint=waypoint)
        host.resize(50)
        assert chart.state == ChartState.READY
        assert chart.circle.circles == []
        assert chart.radius == 50

    def test_not_responsive(self, make_host):
        host = make_host({"pie-value": 30})
        PieChart(host, responsive=False)
        assert host.resize_callbacks == []


class TestInitPieCharts:
    """Test the batch initializer"""

    def test_skips_ready_and_hidden_hosts(self, make_host):
        visible = make_host({"pie-value": 10, "pie-color": "btn-danger", "pie-units": "%"})
        hidden = make_host({"pie-value": 10}, visible=False)
        charts = init_pie_charts([visible, hidden])
        assert len(charts) == 1
        assert visible.chart is charts[0]
        assert charts[0].color == "rgba(255, 103, 91, 1)"
        assert charts[0].units == "%"
        assert hidden.chart is None

    def test_no_double_initialization(self, make_host):
        host = make_host({"pie-value": 10})
        first = init_pie_charts([host])
        second = init_pie_charts([host])
        assert len(first) == 1
        assert second == []
