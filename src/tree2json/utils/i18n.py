from __future__ import annotations

"""
Internationalization (i18n) Utility.

Provides a module-level singleton for user-facing strings. Locale files are
nested JSON dictionaries resolved with dot-notation keys and formatted with
keyword interpolation.
"""

import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
LOCALES_REL_PATH = os.path.join("..", "interface", "locales")


class I18n:
    """
    Resource manager for locale-specific string translations.

    Missing locales or keys never raise: lookups fall back to the key itself.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self._locale = locale
        self._translations: Dict[str, Any] = {}
        self.is_loaded = False

        base_dir = os.path.dirname(os.path.abspath(__file__))
        self._locales_path = os.path.abspath(os.path.join(base_dir, LOCALES_REL_PATH))

        self.load_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def load_locale(self, locale: str) -> None:
        """
        Load a specific translation dictionary from the locales directory.

        Args:
            locale: ISO identifier for the target language.
        """
        file_path = os.path.join(self._locales_path, f"{locale}.json")

        if not os.path.exists(file_path):
            logger.warning(f"I18n: Locale resource missing at '{file_path}'. Keeping '{self._locale}'.")
            return

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                self._translations = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"I18n: Corruption in locale file {file_path}: {e}")
            return

        self._locale = locale
        self.is_loaded = True
        logger.debug(f"I18n: Loaded locale dictionary: {locale}")

    def t(self, key: str, **kwargs: Any) -> str:
        """
        Resolve and format a translation string using dot-notation.

        Args:
            key: Hierarchical identifier path (e.g., 'cli.errors.fetch').
            **kwargs: Dynamic variables for string formatting.

        Returns:
            str: The translated string, or the key itself if unresolved.
        """
        current_val: Any = self._translations
        for k in key.split("."):
            if not isinstance(current_val, dict):
                return key
            current_val = current_val.get(k)

        if not isinstance(current_val, str):
            return key

        try:
            return current_val.format(**kwargs) if kwargs else current_val
        except (KeyError, IndexError, ValueError) as e:
            logger.debug(f"I18n: Formatting error for '{key}': {e}")
            return current_val


# Global singleton instance for application-wide resource access
i18n = I18n(DEFAULT_LOCALE)
