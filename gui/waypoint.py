"""
Scroll waypoint - fires a callback once a widget scrolls into view
"""
from typing import Callable, List, Tuple

from PyQt5.QtCore import QObject, QPoint, QTimer, QEvent

from core.geometry import reached_waypoint


class ScrollWaypoint(QObject):
    """Visibility trigger for widgets inside a QScrollArea"""

    def __init__(self, scroll_area):
        super().__init__(scroll_area)
        self.scroll_area = scroll_area
        self.pending: List[Tuple[object, Callable[[], None], float]] = []
        scroll_area.verticalScrollBar().valueChanged.connect(self.refresh)
        scroll_area.viewport().installEventFilter(self)

    def watch(self, host, callback: Callable[[], None], offset: float = 0.85):
        """Call `callback` once the host's top reaches `offset` of the viewport"""
        self.pending.append((host, callback, offset))
        # Hosts already in view fire after the current layout pass
        QTimer.singleShot(0, self.refresh)

    def eventFilter(self, obj, event):
        if event.type() == QEvent.Resize:
            self.refresh()
        return super().eventFilter(obj, event)

    def refresh(self, *args):
        content = self.scroll_area.widget()
        if content is None:
            return
        scroll_top = self.scroll_area.verticalScrollBar().value()
        viewport_height = self.scroll_area.viewport().height()

        remaining = []
        fired = []
        for host, callback, offset in self.pending:
            top = host.widget.mapTo(content, QPoint(0, 0)).y()
            if reached_waypoint(top, scroll_top, viewport_height, offset):
                fired.append(callback)
            else:
                remaining.append((host, callback, offset))
        self.pending = remaining

        for callback in fired:
            callback()
