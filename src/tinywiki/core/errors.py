"""TinyWiki exception hierarchy.

Shared by the store, the template registry and the application factory so
every module raises and catches the same types.
"""


class WikiError(Exception):
    """Base for all tinywiki-specific errors."""


class StorageError(WikiError, OSError):
    """A page could not be read from or written to the store."""


class PageNotFoundError(StorageError):
    """The requested page has no backing file yet."""

    def __init__(self, title: str) -> None:
        super().__init__(f"page {title!r} does not exist")
        self.title = title


class PageSaveError(StorageError):
    """Writing a page to disk failed."""


class InvalidTitleError(StorageError):
    """The title is not a valid page identifier."""

    def __init__(self, title: str) -> None:
        super().__init__(f"invalid page title: {title!r}")
        self.title = title


class TemplateSetupError(WikiError):
    """The template registry could not be built.

    Raised during startup; the CLI turns it into a clean exit.
    """
