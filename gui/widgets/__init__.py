"""Custom widgets for the check-in GUI."""

from .city_input import CityInputWidget

__all__ = ['CityInputWidget']
