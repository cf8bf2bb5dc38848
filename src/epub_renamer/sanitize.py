"""Filename sanitization for filesystem safety."""

import re
import unicodedata

from loguru import logger

from .models import RESERVED_DEVICE_NAMES, UNTITLED

log = logger.bind(stage="sanitize")

# Typographic punctuation -> ASCII. The ellipsis becomes a single period.
_PUNCTUATION_MAP = str.maketrans(
    {
        "—": "-",  # em dash
        "–": "-",  # en dash
        "―": "-",  # horizontal bar
        "…": ".",  # ellipsis
        "“": '"',
        "”": '"',
        "‘": "'",
        "’": "'",
    }
)

# Portable superset: Windows-forbidden characters plus C0 controls
_FORBIDDEN_RE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

_WHITESPACE_RE = re.compile(r"\s+")

_COMBINING_CATEGORIES = frozenset({"Mn", "Mc", "Me"})

_TRAILING_CLUTTER = ". ;:,"


def collapse_whitespace(text: str) -> str:
    """Collapse any run of whitespace into a single space (no trimming)."""
    return _WHITESPACE_RE.sub(" ", text)


def normalize_punctuation(text: str) -> str:
    """Replace dashes, ellipsis and curly quotes with ASCII equivalents."""
    return text.translate(_PUNCTUATION_MAP)


def remove_diacritics(text: str) -> str:
    """Strip accents: decompose (NFD), drop combining marks, recompose (NFC)."""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(
        ch for ch in decomposed if unicodedata.category(ch) not in _COMBINING_CATEGORIES
    )
    return unicodedata.normalize("NFC", stripped)


def sanitize_filename(text: str | None, strip_diacritics: bool = False) -> str:
    """Sanitize a filename component (not a full path).

    Never fails and never returns an empty string. Forbidden characters are
    replaced with a space rather than deleted so unrelated words don't fuse
    ("Rock/Paper" -> "Rock Paper"). Diacritics are stripped before the
    forbidden-character pass.
    """
    log.debug(f"sanitize_filename(text='{text}', strip_diacritics={strip_diacritics})")

    if text is None or not text.strip():
        return UNTITLED

    cleaned = normalize_punctuation(text)
    if strip_diacritics:
        cleaned = remove_diacritics(cleaned)

    cleaned = _FORBIDDEN_RE.sub(" ", cleaned)
    cleaned = collapse_whitespace(cleaned).strip()
    # Scraped metadata often ends in clutter like "Tolhurst;"
    cleaned = cleaned.rstrip(_TRAILING_CLUTTER)

    if not cleaned:
        return UNTITLED

    if cleaned.upper() in RESERVED_DEVICE_NAMES:
        log.debug(f"Reserved device name: '{cleaned}' -> '_{cleaned}'")
        cleaned = f"_{cleaned}"

    return cleaned


def has_forbidden_chars(name: str) -> bool:
    """True if name contains any character the sanitizer would replace."""
    return _FORBIDDEN_RE.search(name) is not None
