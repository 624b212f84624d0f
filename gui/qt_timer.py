"""
QTimer-backed ticker
"""
from PyQt5.QtCore import QTimer

from core.scheduler import Ticker


class QtTicker(Ticker):
    """Runs the tick callback on the Qt event loop"""

    def __init__(self, callback, parent=None):
        super().__init__(callback)
        self.timer = QTimer(parent)
        self.timer.timeout.connect(self._on_timeout)

    def _on_timeout(self):
        if self.running:
            self.callback()

    def _schedule(self, interval_ms: int):
        self.timer.start(int(interval_ms))

    def _cancel(self):
        self.timer.stop()
