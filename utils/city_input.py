"""
City input state with municipality suggestions.

Keeps the text of a city field, its suggestion list and the INE code of
the municipality it resolved to. Hosting UIs feed it keystrokes through
`type_text` and call `reconcile` whenever the field may have changed
behind their back (browser/OS autofill, programmatic writes), which
auto-corrects spellings that lost their accents.
"""

import logging

from config import MUNICIPALITY_MIN_QUERY_LENGTH
from utils.municipality_search import search_municipalities, find_municipality_by_name

logger = logging.getLogger(__name__)


class CityInputController:
    """
    Controller behind a city text field.

    Attributes:
        value: Text currently shown in the field
        suggestions: Ranked Municipality suggestions for `value`
        selected: Municipality the value resolved to, or None
        highlighted_index: Keyboard-highlighted suggestion (-1 for none)
    """

    def __init__(self, value="", on_change=None, gazetteer=None):
        """
        Initialize controller.

        Args:
            value: Initial text (e.g. when editing an existing traveler)
            on_change: Callable (city, ine_code) invoked on every change
            gazetteer: Optional gazetteer frame (defaults to the bundled one)
        """
        self.value = value or ""
        self.on_change = on_change
        self.gazetteer = gazetteer
        self.suggestions = []
        self.selected = None
        self.highlighted_index = -1

        if self.value:
            self.selected = find_municipality_by_name(self.value, self.gazetteer)

    @property
    def ine_code(self):
        return self.selected.ine_code if self.selected else None

    def _notify(self, city, ine_code):
        if self.on_change is not None:
            self.on_change(city, ine_code)

    def _refresh_suggestions(self):
        if len(self.value) >= MUNICIPALITY_MIN_QUERY_LENGTH:
            self.suggestions = search_municipalities(self.value, gazetteer=self.gazetteer)
        else:
            self.suggestions = []
        self.highlighted_index = -1

    def type_text(self, text):
        """
        Handle ordinary keystroke input.

        Editing away from a selected municipality drops its INE code.
        """
        self.value = text or ""
        self._refresh_suggestions()

        if self.selected and self.value != self.selected.name:
            self.selected = None

        self._notify(self.value, self.ine_code)

    def select(self, municipality):
        """Pick a suggestion: show its canonical name and attach its code."""
        self.value = municipality.name
        self.selected = municipality
        self.suggestions = []
        self.highlighted_index = -1
        self._notify(municipality.name, municipality.ine_code)

    def move_highlight(self, step):
        """Move the keyboard highlight by `step`, wrapping around."""
        if not self.suggestions:
            self.highlighted_index = -1
            return
        self.highlighted_index = (self.highlighted_index + step) % len(self.suggestions)

    def submit_text(self):
        """
        Handle Enter.

        Selects the highlighted (or first) suggestion; without suggestions,
        falls back to an exact name match.

        Returns:
            Municipality or None: The selection made
        """
        if self.suggestions:
            index = self.highlighted_index if self.highlighted_index >= 0 else 0
            municipality = self.suggestions[index]
            self.select(municipality)
            return municipality

        if len(self.value) >= MUNICIPALITY_MIN_QUERY_LENGTH:
            match = find_municipality_by_name(self.value, self.gazetteer)
            if match:
                self.select(match)
                return match

        return None

    def dismiss(self):
        """Close the suggestion list (Escape, Tab, click outside)."""
        self.suggestions = []
        self.highlighted_index = -1

    def reconcile(self, current_value):
        """
        Reconcile a value written to the field without going through `type_text`.

        When the new value matches a municipality, the canonical spelling
        replaces it and the INE code is attached; otherwise the code is
        cleared.

        Args:
            current_value: Text the field holds right now

        Returns:
            str: Text the field should display
        """
        current_value = current_value or ""
        if current_value == self.value:
            return self.value

        logger.debug(f"External change detected: '{self.value}' -> '{current_value}'")
        self.value = current_value
        self._refresh_suggestions()

        match = None
        if len(current_value) >= MUNICIPALITY_MIN_QUERY_LENGTH:
            match = find_municipality_by_name(current_value, self.gazetteer)

        if match:
            if match.name != current_value:
                logger.info(f"Auto-corrected city '{current_value}' -> '{match.name}'")
            self.value = match.name
            self.selected = match
            self._notify(match.name, match.ine_code)
        else:
            self.selected = None
            self._notify(current_value, None)

        return self.value
