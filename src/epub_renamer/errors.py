"""Exception hierarchy for the EPUB renamer.

The normalization core is total and raises nothing; only configuration
parsing and manifest loading at the edges can fail.
"""


class RenamerError(Exception):
    """Base exception for all renamer errors."""


class ConfigError(RenamerError):
    """Invalid or missing configuration."""


class ManifestError(RenamerError):
    """Metadata manifest could not be read or has the wrong shape."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
