"""Exception classes for dotify."""


class DotifyError(Exception):
    """Base exception for all dotify-related errors."""

    pass


class ConfigError(DotifyError):
    """Raised when the user's .dotrc cannot be used.

    The config loader recovers from this itself by falling back to the
    built-in defaults; it never reaches the CLI.
    """

    pass


class NotInstalledError(DotifyError):
    """Raised when the tracked directory is missing or not a git repository."""

    pass
