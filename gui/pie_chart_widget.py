"""
Pie Chart Widget for the Dashboard
"""
from typing import Callable, Dict, List, Optional

from PyQt5.QtWidgets import QWidget, QLabel, QFrame, QSizePolicy
from PyQt5.QtCore import Qt

from core.chart import ChartHost, READY_CLASS
from core.render_target import RenderTarget
from .canvas_surface import CanvasSurface, CanvasWidget


class PieChartWidget(QWidget):
    """Host widget: backdrop disc, canvas and centred value label"""

    def __init__(self, data: Dict, parent=None, pixel_ratio: float = 2):
        super().__init__(parent)
        self.data = dict(data)
        self.classes = {"vc_pie_chart"}
        self.resize_callbacks: List[Callable[[], None]] = []
        self._last_width: Optional[int] = None

        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

        self.back = QFrame(self)
        self.back.setObjectName("vc_pie_chart_back")
        self.canvas = CanvasWidget(self, pixel_ratio=pixel_ratio)
        self.label = QLabel("", self)
        self.label.setObjectName("vc_pie_chart_value")
        self.label.setAlignment(Qt.AlignCenter)
        self.label.setStyleSheet("font-size: 28px; font-weight: bold; color: #333; background: transparent;")

        self.host = PieChartHost(self)

    def set_size(self, size: float):
        side = max(0, int(size))
        self.setFixedHeight(side)
        x = max(0, (self.width() - side) // 2)
        self.back.setGeometry(x, 0, side, side)
        self.back.setStyleSheet(f"""
            QFrame#vc_pie_chart_back {{
                background-color: #f0f0f0;
                border-radius: {side // 2}px;
            }}
        """)
        self.canvas.setGeometry(x, 0, side, side)
        self.label.setGeometry(x, 0, side, side)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        width = self.width()
        if self._last_width is not None and width != self._last_width:
            self._last_width = width
            for callback in list(self.resize_callbacks):
                callback()
        else:
            self._last_width = width


class PieChartHost(ChartHost):
    """ChartHost view of a PieChartWidget"""

    def __init__(self, widget: PieChartWidget):
        self.widget = widget
        self.data = widget.data
        self.chart = None

    def width(self) -> float:
        return self.widget.width() if self.widget.isVisible() else 0

    def visible_ancestor_width(self) -> float:
        parent = self.widget.parentWidget()
        while parent is not None and not parent.isVisible():
            parent = parent.parentWidget()
        return parent.width() if parent is not None else 0

    def is_visible(self) -> bool:
        return self.widget.isVisible()

    def is_ready(self) -> bool:
        return READY_CLASS in self.widget.classes

    def mark_ready(self):
        self.widget.classes.add(READY_CLASS)

    def layout(self, size: float):
        self.widget.set_size(size)

    def prepare_canvas(self, size: float) -> RenderTarget:
        self.widget.canvas.frame = []
        return CanvasSurface(self.widget.canvas)

    def set_label_text(self, text: str):
        self.widget.label.setText(text)

    def on_resize(self, callback: Callable[[], None]):
        self.widget.resize_callbacks.append(callback)
