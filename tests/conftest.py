"""
Shared fixtures: an in-memory chart host and visibility trigger
"""
import pytest

from core.chart import ChartHost, READY_CLASS
from core.render_target import RecordingSurface


class FakeHost(ChartHost):
    """ChartHost backed by plain attributes"""

    def __init__(self, data, width=100, ancestor_width=0, visible=True):
        self.data = data
        self._width = width
        self.ancestor_width = ancestor_width
        self.visible = visible
        self.classes = set()
        self.label_text = ""
        self.label_history = []
        self.layout_sizes = []
        self.surfaces = []
        self.resize_callbacks = []
        self.chart = None

    def width(self):
        return self._width

    def visible_ancestor_width(self):
        return self.ancestor_width

    def is_visible(self):
        return self.visible

    def is_ready(self):
        return READY_CLASS in self.classes

    def mark_ready(self):
        self.classes.add(READY_CLASS)

    def layout(self, size):
        self.layout_sizes.append(size)

    def prepare_canvas(self, size):
        surface = RecordingSurface(size, size)
        self.surfaces.append(surface)
        return surface

    def set_label_text(self, text):
        self.label_text = text
        self.label_history.append(text)

    def on_resize(self, callback):
        self.resize_callbacks.append(callback)

    def resize(self, width):
        self._width = width
        for callback in self.resize_callbacks:
            callback()


class FakeWaypoint:
    """Visibility trigger that fires only when told to"""

    def __init__(self):
        self.watched = []

    def watch(self, host, callback, offset=0.85):
        self.watched.append((host, callback, offset))

    def trigger(self):
        watched, self.watched = self.watched, []
        for _, callback, _ in watched:
            callback()


@pytest.fixture
def make_host():
    def factory(data=None, **kwargs):
        return FakeHost(data or {}, **kwargs)
    return factory


@pytest.fixture
def waypoint():
    return FakeWaypoint()
