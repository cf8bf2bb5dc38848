"""Compose "{title} - {authors}" filename stems."""

from loguru import logger

from .models import MAX_STEM_LENGTH
from .sanitize import collapse_whitespace, sanitize_filename

log = logger.bind(stage="stem")


def normalize_extension(extension: str) -> str:
    """Ensure a leading dot: "epub" -> ".epub". Empty stays empty."""
    extension = extension.strip()
    if extension and not extension.startswith("."):
        return f".{extension}"
    return extension


def build_stem(
    title: str,
    authors_joined: str,
    strip_diacritics: bool = False,
    max_length: int = MAX_STEM_LENGTH,
) -> str:
    """Build a sanitized filename stem (no extension).

    Title and authors are sanitized independently, joined with " - " and
    cut to max_length. A cut never leaves a trailing period or space.
    """
    title_part = sanitize_filename(title, strip_diacritics)
    authors_part = sanitize_filename(authors_joined, strip_diacritics)

    stem = collapse_whitespace(f"{title_part} - {authors_part}").strip()

    if len(stem) > max_length:
        truncated = stem[:max_length].rstrip(". ")
        log.debug(f"Truncated stem from {len(stem)} to {len(truncated)} chars: '{truncated}'")
        stem = truncated

    return stem


def build_filename(stem: str, extension: str, strip_diacritics: bool = False) -> str:
    """Final filename: sanitize stem + extension once more as a whole.

    Concatenation can introduce new violations, so the assembled name goes
    through the sanitizer again.
    """
    return sanitize_filename(f"{stem}{normalize_extension(extension)}", strip_diacritics)
