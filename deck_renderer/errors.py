"""
Error hierarchy for deck rendering.

Every failure surfaced by the renderer derives from :class:`RenderError`, so
callers (and the CLI) can catch one type and turn it into a non-zero exit.
All errors are fatal: there is no retry and no partial output.
"""


class RenderError(Exception):
    """Base class for every error raised while rendering a deck."""


class NotFoundError(RenderError, FileNotFoundError):
    """The markdown source file does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Markdown source '{path}' not found")


class ConversionError(RenderError):
    """
    The source could not be converted or the output could not be written.

    Raised for a malformed header block, an unreadable or non-UTF-8 source,
    and any file-system failure while writing the presentation.
    """

    def __init__(self, message: str, *, path=None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class ConfigurationError(RenderError, ValueError):
    """A render option (theme, URL, variable, ...) is invalid."""
