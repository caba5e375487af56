from typing import Any


class ConfigurationError(ValueError):
    """A grammar item is structurally invalid"""

    def __init__(self, msg: str, item: Any = None):
        super().__init__(msg)
        self.item = item


class GrammarLoadError(ConfigurationError):
    """Grammar file could not be read or parsed"""
