"""
GUI - Qt widgets for the animated chart dashboard
"""
