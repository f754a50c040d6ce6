"""
GUI module for traveler check-in.

Contains PyQt6-based input widgets.
"""
