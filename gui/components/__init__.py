"""
GUI Components - Reusable UI components
"""
from .helpers import OptionChangeHelper

__all__ = ['OptionChangeHelper']
