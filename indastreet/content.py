"""Read-only display text lookup."""

from __future__ import annotations

from collections.abc import Mapping

from indastreet.constant import CONTENT_TEXT


class ContentStore:
    """Static key-value text with caller-supplied fallbacks."""

    def __init__(self, text: Mapping[str, str] | None = None) -> None:
        self._text: dict[str, str] = dict(CONTENT_TEXT if text is None else text)

    def get(self, key: str, default: str) -> str:
        """Return the stored text for ``key``, or ``default`` when missing or empty."""
        value = self._text.get(key)
        if not value:
            return default
        return value
