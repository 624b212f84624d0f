"""
Chart Card Widget for the Dashboard
"""
from typing import Dict

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QLabel
from PyQt5.QtCore import Qt

from .pie_chart_widget import PieChartWidget


class ChartCard(QWidget):
    """Card widget displaying a titled pie chart"""

    def __init__(self, title: str, data: Dict, parent=None, pixel_ratio: float = 2):
        super().__init__(parent)
        self.title = title
        self.data = data
        self.pixel_ratio = pixel_ratio
        self.setup_ui()

    def setup_ui(self):
        """Setup the card UI"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(10)

        self.setStyleSheet("""
            ChartCard {
                background-color: white;
                border-radius: 10px;
                border: 1px solid #e0e0e0;
            }
        """)

        self.chart_widget = PieChartWidget(self.data, self, pixel_ratio=self.pixel_ratio)
        layout.addWidget(self.chart_widget)

        title_label = QLabel(self.title)
        title_label.setAlignment(Qt.AlignCenter)
        title_label.setStyleSheet("font-size: 18px; font-weight: bold; color: #333; margin-top: 10px;")
        layout.addWidget(title_label)

    @property
    def host(self):
        return self.chart_widget.host
