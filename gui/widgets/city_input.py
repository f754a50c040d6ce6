"""
City input widget with municipality suggestions and autofill correction.
"""

import logging

from PyQt6.QtWidgets import QWidget, QVBoxLayout, QLineEdit, QLabel, QCompleter
from PyQt6.QtCore import Qt, QEvent, QTimer, QStringListModel, pyqtSignal

from config import CITY_INPUT_POLL_INTERVAL_MS
from utils.city_input import CityInputController

logger = logging.getLogger(__name__)


class CityInputWidget(QWidget):
    """
    City line edit backed by the municipality gazetteer.

    Features:
    - Suggestion popup after two characters (accent-insensitive)
    - Enter picks the highlighted suggestion or the exact match
    - Values written without keystrokes (autofill, setText) are reconciled
      on a short poll while focused and when editing finishes
    """

    city_changed = pyqtSignal(str, str)  # (city, INE code or "")

    def __init__(self, label_text: str = "City", value: str = "", gazetteer=None):
        """
        Initialize city input widget.

        Args:
            label_text: Label shown above the field
            value: Initial city
            gazetteer: Optional gazetteer frame (defaults to the bundled one)
        """
        super().__init__()

        self.label_text = label_text
        self.controller = CityInputController(value=value, on_change=self._on_change, gazetteer=gazetteer)

        self.poll_timer = QTimer(self)
        self.poll_timer.setInterval(CITY_INPUT_POLL_INTERVAL_MS)
        self.poll_timer.timeout.connect(self.reconcile)

        self._init_ui()

    def _init_ui(self):
        """Initialize the UI components."""
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.label = QLabel(self.label_text)
        layout.addWidget(self.label)

        self.line_edit = QLineEdit(self.controller.value)
        self.line_edit.setPlaceholderText("Start typing a city...")

        self.suggestion_model = QStringListModel(self)
        self.completer = QCompleter(self.suggestion_model, self)
        self.completer.setCompletionMode(QCompleter.CompletionMode.UnfilteredPopupCompletion)
        self.completer.setCaseSensitivity(Qt.CaseSensitivity.CaseInsensitive)
        self.line_edit.setCompleter(self.completer)

        self.line_edit.installEventFilter(self)
        self.line_edit.textEdited.connect(self._on_text_edited)
        self.line_edit.returnPressed.connect(self._on_return_pressed)
        self.line_edit.editingFinished.connect(self.reconcile)
        self.completer.activated.connect(self._on_suggestion_activated)

        layout.addWidget(self.line_edit)
        self.setLayout(layout)

    @property
    def ine_code(self):
        return self.controller.ine_code

    def text(self):
        return self.line_edit.text()

    def focusInEvent(self, event):
        super().focusInEvent(event)
        self.line_edit.setFocus()

    def start_polling(self):
        if not self.poll_timer.isActive():
            self.poll_timer.start()

    def stop_polling(self):
        self.poll_timer.stop()

    def eventFilter(self, obj, event):
        # Poll only while the field has focus
        if obj is self.line_edit:
            if event.type() == QEvent.Type.FocusIn:
                self.start_polling()
            elif event.type() == QEvent.Type.FocusOut:
                self.stop_polling()
        return super().eventFilter(obj, event)

    def _on_change(self, city, ine_code):
        self.city_changed.emit(city, ine_code or "")

    def _refresh_popup(self):
        self.suggestion_model.setStringList([m.name for m in self.controller.suggestions])
        if self.controller.suggestions:
            self.completer.complete()
        else:
            self.completer.popup().hide()

    def _on_text_edited(self, text):
        self.controller.type_text(text)
        self._refresh_popup()

    def _on_suggestion_activated(self, name):
        for municipality in self.controller.suggestions:
            if municipality.name == name:
                logger.debug(f"Selected municipality {municipality.ine_code} {municipality.name}")
                self.controller.select(municipality)
                break
        self.line_edit.setText(self.controller.value)

    def _on_return_pressed(self):
        if self.completer.popup().isVisible():
            return
        if self.controller.submit_text() is not None:
            self.line_edit.setText(self.controller.value)
            self.completer.popup().hide()

    def reconcile(self):
        """Check the field for out-of-band writes and correct the spelling."""
        current = self.line_edit.text()
        corrected = self.controller.reconcile(current)
        if corrected != current:
            self.line_edit.setText(corrected)
        return corrected
