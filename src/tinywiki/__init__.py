"""TinyWiki: a file-backed wiki with view, edit and save routes."""

__version__ = "0.1.0"
