"""
Core Chart Models and Logic
"""
from .geometry import Point, InfoLine, absolute_position, info_line_points, reached_waypoint
from .render_target import RenderTarget, Label, RecordingSurface
from .scheduler import Ticker, ManualTicker
from .progress_circle import RingSpec, Circle, ProgressCircle
from .chart import ChartState, ChartAttributes, ChartHost, PieChart, init_pie_charts
from .settings import CoreSettings, OptionStore, NonceManager, SaveResult

__all__ = [
    'Point',
    'InfoLine',
    'absolute_position',
    'info_line_points',
    'reached_waypoint',
    'RenderTarget',
    'Label',
    'RecordingSurface',
    'Ticker',
    'ManualTicker',
    'RingSpec',
    'Circle',
    'ProgressCircle',
    'ChartState',
    'ChartAttributes',
    'ChartHost',
    'PieChart',
    'init_pie_charts',
    'CoreSettings',
    'OptionStore',
    'NonceManager',
    'SaveResult'
]
