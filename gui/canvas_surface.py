"""
Qt Canvas Render Target

CanvasWidget keeps the drawing calls of the current frame and replays them
in paintEvent. Coordinates are canvas pixels; the widget is shown at
1/pixel_ratio of that size, like a high-DPI HTML canvas scaled down by CSS.
"""
import math
from typing import List, Optional, Tuple

from PyQt5.QtWidgets import QWidget, QLabel
from PyQt5.QtCore import Qt, QRectF, QPointF
from PyQt5.QtGui import QPainter, QPainterPath, QColor, QPen, QBrush

from core.colors import parse_css_color
from core.render_target import Label, RenderTarget


def to_qcolor(text: str) -> QColor:
    """CSS colour string to QColor, falling back to Qt's named colours"""
    try:
        r, g, b, a = parse_css_color(text)
        return QColor(r, g, b, a)
    except ValueError:
        return QColor(text)


class CanvasWidget(QWidget):
    """Widget that paints the recorded frame"""

    def __init__(self, parent=None, pixel_ratio: float = 2):
        super().__init__(parent)
        self.pixel_ratio = pixel_ratio
        self.frame: List[Tuple[str, tuple]] = []
        self.setAttribute(Qt.WA_TransparentForMouseEvents)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.scale(1 / self.pixel_ratio, 1 / self.pixel_ratio)

        for op, args in self.frame:
            if op == "wedge":
                self._paint_wedge(painter, *args)
            elif op == "segments":
                self._paint_segments(painter, *args)
        painter.end()

    def _paint_wedge(self, painter, center, inner_radius, outer_radius,
                     start_angle, end_angle, fill_color, outline_color):
        # Qt angles are degrees counter-clockwise; canvas angles run clockwise
        start_deg = -math.degrees(start_angle)
        sweep_deg = -math.degrees(end_angle - start_angle)
        inner = QRectF(center.x - inner_radius, center.y - inner_radius,
                       inner_radius * 2, inner_radius * 2)
        outer = QRectF(center.x - outer_radius, center.y - outer_radius,
                       outer_radius * 2, outer_radius * 2)

        path = QPainterPath()
        path.arcMoveTo(inner, start_deg)
        path.arcTo(inner, start_deg, sweep_deg)
        path.arcTo(outer, start_deg + sweep_deg, -sweep_deg)
        path.closeSubpath()

        painter.setPen(QPen(to_qcolor(outline_color), 1))
        painter.setBrush(QBrush(to_qcolor(fill_color)))
        painter.drawPath(path)

    def _paint_segments(self, painter, points, color, close):
        path = QPainterPath()
        path.moveTo(QPointF(points[0].x, points[0].y))
        for point in points[1:]:
            path.lineTo(QPointF(point.x, point.y))
        if close:
            path.closeSubpath()

        painter.setPen(QPen(to_qcolor(color), 1))
        painter.setBrush(Qt.NoBrush)
        painter.drawPath(path)


class WidgetOffsetNode:
    """Offset-chain view of a QWidget, in canvas pixels"""

    def __init__(self, widget: QWidget, pixel_ratio: float):
        self.widget = widget
        self.pixel_ratio = pixel_ratio

    @property
    def offset_left(self) -> float:
        return 0 if self.widget.isWindow() else self.widget.x() * self.pixel_ratio

    @property
    def offset_top(self) -> float:
        return 0 if self.widget.isWindow() else self.widget.y() * self.pixel_ratio

    @property
    def offset_parent(self) -> Optional["WidgetOffsetNode"]:
        if self.widget.isWindow():
            return None
        parent = self.widget.parentWidget()
        return WidgetOffsetNode(parent, self.pixel_ratio) if parent is not None else None


class InfoLabel(Label):
    """QLabel placed on the top-level window"""

    def __init__(self, window: QWidget, label_id: str, color: str, pixel_ratio: float):
        self.pixel_ratio = pixel_ratio
        self.label = QLabel(window)
        self.label.setObjectName(label_id)
        self.label.setProperty("class", "ProgressCircleInfo")
        self.label.setStyleSheet(f"color: {to_qcolor(color).name()}; background: transparent;")
        self.x = 0.0
        self.y = 0.0
        self.label.show()

    def set_text(self, text: str):
        self.label.setText(text)
        self.label.adjustSize()

    def height(self) -> float:
        return self.label.sizeHint().height() * self.pixel_ratio

    def move(self, x: float, y: Optional[float] = None):
        if x is not None:
            self.x = x
        if y is not None:
            self.y = y
        self.label.move(int(self.x / self.pixel_ratio), int(self.y / self.pixel_ratio))


class CanvasSurface(RenderTarget):
    """RenderTarget over a CanvasWidget"""

    def __init__(self, widget: CanvasWidget):
        self.widget = widget
        self.node = WidgetOffsetNode(widget, widget.pixel_ratio)
        self.labels = {}

    @property
    def width(self) -> float:
        return self.widget.width() * self.widget.pixel_ratio

    @property
    def height(self) -> float:
        return self.widget.height() * self.widget.pixel_ratio

    @property
    def offset_left(self) -> float:
        return self.node.offset_left

    @property
    def offset_top(self) -> float:
        return self.node.offset_top

    @property
    def offset_parent(self):
        return self.node.offset_parent

    def clear(self):
        self.widget.frame = []
        self.widget.update()

    def draw_annular_wedge(self, center, inner_radius, outer_radius,
                           start_angle, end_angle, fill_color, outline_color):
        self.widget.frame.append(("wedge", (center, inner_radius, outer_radius,
                                            start_angle, end_angle, fill_color, outline_color)))
        self.widget.update()

    def draw_segments(self, points, color, close=False):
        self.widget.frame.append(("segments", (list(points), color, close)))
        self.widget.update()

    def create_label(self, label_id: str, color: str) -> Label:
        label = InfoLabel(self.widget.window(), label_id, color, self.widget.pixel_ratio)
        self.labels[label_id] = label
        return label
