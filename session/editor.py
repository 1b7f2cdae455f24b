"""Source buffer standing in for the editor widget."""

from config.defaults import DEFAULTS


class SourceBuffer:
    def __init__(self, value=None):
        self._value = DEFAULTS["sample_source"] if value is None else value

    def get_value(self):
        return self._value

    def set_value(self, text):
        self._value = text or ""
