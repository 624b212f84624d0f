"""
Main GUI Application - Animated Chart Dashboard with Core Settings
"""
import os
import sys
import json
import asyncio
import threading
from typing import Dict, List

from PyQt5.QtWidgets import (QApplication, QMainWindow, QWidget, QVBoxLayout,
                             QGridLayout, QLabel, QTabWidget,
                             QScrollArea, QCheckBox, QMessageBox)
from PyQt5.QtCore import QTimer, Qt

from core.chart import PieChart, init_pie_charts
from core.settings import CoreSettings, NonceManager, OptionStore, DEFAULT_CAPABILITY
from services.settings_console import SettingsConsoleServer
from .chart_card import ChartCard
from .components import OptionChangeHelper
from .qt_timer import QtTicker
from .waypoint import ScrollWaypoint

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULT_CONFIG = {
    "charts": [
        {"title": "Design", "pie-value": 75, "pie-width": 6, "pie-color": "btn-primary", "pie-units": "%"},
        {"title": "Development", "pie-value": 40, "pie-label-value": "Projects", "pie-width": 6,
         "pie-color": "btn-success"},
    ],
    "chart_options": {"responsive": True, "is_mobile": False, "pixel_ratio": 2},
    "settings": {"options_path": "config/options.json", "secret": "change-me"},
    "settings_console": {"enabled": False, "host": "localhost", "port": 8765},
}


class MainWindow(QMainWindow):
    """Main application window"""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Animated Chart Dashboard")
        self.setGeometry(100, 100, 1200, 800)

        self.config = self.load_config()
        self.chart_options = self.config.get("chart_options", {})

        settings_config = self.config.get("settings", {})
        options_path = settings_config.get("options_path", "config/options.json")
        if not os.path.isabs(options_path):
            options_path = os.path.join(PROJECT_ROOT, options_path)
        self.settings = CoreSettings(
            OptionStore(options_path),
            NonceManager(settings_config.get("secret", "change-me")),
            enable_debug=settings_config.get("enable_debug", False)
        )

        self.cards: List[ChartCard] = []
        self.charts: List[PieChart] = []
        self.option_checkboxes: Dict[str, QCheckBox] = {}

        self.option_change_helper = OptionChangeHelper(self.on_option_changed)
        self.settings_console = None
        self.console_thread = None
        self.console_loop = None
        self.start_settings_console()

        self.setup_ui()

        # Charts measure themselves, so they start once the window is laid out
        QTimer.singleShot(0, self.init_charts)

    def load_config(self) -> dict:
        """Load configuration from config.json"""
        config_path = os.path.join(PROJECT_ROOT, "config", "config.json")
        try:
            with open(config_path, "r") as f:
                return json.load(f)
        except FileNotFoundError:
            QMessageBox.warning(self, "Config Error",
                                f"config.json not found at {config_path}. Using defaults.")
            return DEFAULT_CONFIG

    def setup_ui(self):
        """Setup the user interface"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        central_widget.setStyleSheet("background-color: #f5f5f5;")

        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(20)

        title_label = QLabel("Animated Chart Dashboard")
        title_label.setStyleSheet("font-size: 24px; font-weight: bold; color: #333;")
        layout.addWidget(title_label)

        tabs = QTabWidget()
        tabs.addTab(self.create_charts_tab(), "Charts")
        tabs.addTab(self.create_settings_tab(), "Core Settings")
        tabs.currentChanged.connect(lambda index: QTimer.singleShot(0, self.init_charts))
        layout.addWidget(tabs)

        self.statusBar().showMessage("Ready")

    def create_charts_tab(self) -> QWidget:
        """Scrollable grid of chart cards"""
        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)

        content = QWidget()
        grid = QGridLayout(content)
        grid.setSpacing(20)

        pixel_ratio = self.chart_options.get("pixel_ratio", 2)
        columns = self.chart_options.get("columns", 3)
        for index, chart_config in enumerate(self.config.get("charts", [])):
            data = {key: value for key, value in chart_config.items() if key != "title"}
            card = ChartCard(chart_config.get("title", ""), data, pixel_ratio=pixel_ratio)
            grid.addWidget(card, index // columns, index % columns, Qt.AlignTop)
            self.cards.append(card)

        self.scroll_area.setWidget(content)
        self.waypoint = ScrollWaypoint(self.scroll_area)
        return self.scroll_area

    def create_settings_tab(self) -> QWidget:
        """On/off switches for the allow-listed core options"""
        widget = QWidget()
        layout = QVBoxLayout(widget)
        layout.setSpacing(15)

        notes = QLabel("Disable legacy features or activate up-to-date functionalities. "
                       "Changing these parameters may alter existing installations; "
                       "perform a backup before proceeding.")
        notes.setWordWrap(True)
        notes.setStyleSheet("font-size: 14px; color: #666;")
        layout.addWidget(notes)

        for option in self.settings.page():
            row = QVBoxLayout()
            checkbox = QCheckBox(option["title"])
            checkbox.setStyleSheet("font-size: 16px; font-weight: bold;")
            checkbox.setChecked(self.settings.is_enabled(option["id"]))
            checkbox.setToolTip(option["warning"])
            checkbox.toggled.connect(
                lambda checked, option_id=option["id"], autoload=option["autoload"]:
                self.save_option(option_id, checked, autoload))
            row.addWidget(checkbox)

            description = QLabel(option["desc"])
            description.setWordWrap(True)
            description.setStyleSheet("font-size: 13px; color: #666;")
            row.addWidget(description)

            layout.addLayout(row)
            self.option_checkboxes[option["id"]] = checkbox

        layout.addStretch()
        return widget

    def init_charts(self):
        """Create charts for visible cards not yet initialized"""
        options = dict(
            responsive=self.chart_options.get("responsive", True),
            is_mobile=self.chart_options.get("is_mobile", False),
            pixel_ratio=self.chart_options.get("pixel_ratio", 2),
            waypoint=self.waypoint,
            ticker_factory=QtTicker,
        )
        self.charts.extend(init_pie_charts([card.host for card in self.cards], **options))

    def save_option(self, option_id: str, enabled: bool, autoload: bool):
        """Save a toggled option through the same handler remote clients use"""
        request = {
            "nonce": self.settings.nonce(),
            "option_id": option_id,
            "value": "true" if enabled else "false",
            "autoload": "true" if autoload else "false"
        }
        result = self.settings.save_option(request, [DEFAULT_CAPABILITY])
        self.statusBar().showMessage(result.message, 3000)
        if not result.success:
            QMessageBox.warning(self, "Core Settings", result.message)

    def on_option_changed(self, option_id: str, value):
        """Reflect an option saved from the settings console (GUI thread)"""
        checkbox = self.option_checkboxes.get(option_id)
        if checkbox is None:
            return
        checkbox.blockSignals(True)
        checkbox.setChecked(self.settings.is_enabled(option_id))
        checkbox.blockSignals(False)
        self.statusBar().showMessage(f"{option_id} updated remotely", 3000)

    def start_settings_console(self):
        """Start the settings console server in a separate thread"""
        console_config = self.config.get("settings_console", {})
        if not console_config.get("enabled", False):
            print("Settings console is disabled in config.json")
            return

        host = console_config.get("host", "localhost")
        port = console_config.get("port", 8765)
        users = console_config.get("users", None)

        print(f"Starting Settings Console Server on ws://{host}:{port}...")
        self.settings_console = SettingsConsoleServer(self.settings, host=host, port=port, users=users)
        self.settings_console.on_option_saved = self.option_change_helper.notify

        def run_console():
            self.console_loop = asyncio.new_event_loop()
            asyncio.set_event_loop(self.console_loop)
            try:
                self.console_loop.run_until_complete(self.settings_console.start())
            except Exception as e:
                print(f"Settings console error: {e}")

        self.console_thread = threading.Thread(target=run_console, daemon=True)
        self.console_thread.start()

    def closeEvent(self, event):
        """Handle window close event"""
        for chart in self.charts:
            chart.circle.stop()

        if self.console_loop is not None:
            try:
                self.console_loop.call_soon_threadsafe(self.console_loop.stop)
            except RuntimeError as e:
                print(f"Error stopping settings console: {e}")
        event.accept()


def main():
    """Main entry point"""
    app = QApplication(sys.argv)

    window = MainWindow()
    window.show()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
