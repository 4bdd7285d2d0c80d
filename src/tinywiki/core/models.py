"""Data models for TinyWiki."""

import re

from pydantic import BaseModel, Field

# Titles double as file stems, so they are restricted to ASCII letters and digits.
TITLE_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")


def is_valid_title(title: str) -> bool:
    """Return True if ``title`` can name a page."""
    return TITLE_PATTERN.fullmatch(title) is not None


class Page(BaseModel):
    """Represents a wiki page."""

    title: str = Field(min_length=1, pattern=TITLE_PATTERN.pattern)
    body: bytes = b""
    exists: bool = True

    @property
    def text(self) -> str:
        """Return the body decoded for display."""
        return self.body.decode("utf-8", errors="replace")
