"""
Services
Remote settings console
"""
from .settings_console import SettingsConsoleServer

__all__ = [
    'SettingsConsoleServer'
]
