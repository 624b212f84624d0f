"""
Helper classes for GUI
"""
from PyQt5.QtCore import QObject, pyqtSignal


class OptionChangeHelper(QObject):
    """Delivers option changes from the console thread to the GUI thread"""
    option_changed = pyqtSignal(str, object)

    def __init__(self, target_method):
        super().__init__()
        self.option_changed.connect(target_method)

    def notify(self, option_id: str, value):
        self.option_changed.emit(option_id, value)
