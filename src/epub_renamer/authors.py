"""Conservative author-name normalization.

Reorders "Last, First" strings into the requested display order, but only
when a comma makes the intent explicit and the string doesn't look like
several authors crammed into one field. When in doubt, the cleaned input
is returned unchanged.
"""

from __future__ import annotations

import re
from typing import Iterable

from loguru import logger

from .models import AUTHOR_JOINER, NAME_SUFFIXES, UNKNOWN_AUTHOR, AuthorOrder
from .sanitize import collapse_whitespace

log = logger.bind(stage="authors")

# "Doe ,  Jane" / "Doe,,Jane" -> "Doe, Jane"
_COMMA_RE = re.compile(r"\s*,(?:\s*,)*\s*")
# A period between two letters, e.g. "J.Kent"
_INITIAL_PERIOD_RE = re.compile(r"(?<=[^\W\d_])\.(?=[^\W\d_])")

_FILENAME_AUTHOR_SEPARATOR = " -- "
_MAX_INFERRED_AUTHOR_LENGTH = 60


def insert_space_after_initials(text: str) -> str:
    """Fix "J.Kent Layton" -> "J. Kent Layton".

    Only when the next letter is upper-case, so "e.g." is left alone.
    """
    return _INITIAL_PERIOD_RE.sub(
        lambda m: ". " if text[m.end()].isupper() else ".", text
    )


def clean_author(text: str) -> str:
    """Collapse whitespace, tidy comma spacing and spacing after initials."""
    s = collapse_whitespace(text).strip()
    s = _COMMA_RE.sub(", ", s).strip()
    return insert_space_after_initials(s)


def is_name_suffix(value: str) -> bool:
    """True for Jr/Sr/II/III/IV/V, case-insensitive, trailing period ignored."""
    return value.strip().strip(".").lower() in NAME_SUFFIXES


def normalize_author(text: str | None, order: AuthorOrder) -> str:
    """Reorder a "Last, First[, Suffix]" author string.

    Returns the cleaned string without reordering when:
      - order is as-is, or there is no comma to go on
      - there are more than 3 comma segments (several authors in one field)
      - a 3rd segment is not a name suffix
      - both sides of the comma have 2+ words ("Foo Bar, Zoo Goo" is two
        authors, not "Last, First")
    """
    if text is None or not text.strip():
        return text or ""

    s = clean_author(text)

    if order == AuthorOrder.AS_IS or "," not in s:
        return s

    parts = [collapse_whitespace(p).strip() for p in s.split(",")]
    parts = [p for p in parts if p]

    if len(parts) < 2:
        return s
    if len(parts) > 3:
        log.debug(f"normalize_author: '{s}' -> unchanged ({len(parts)} segments)")
        return s

    last, first_middle = parts[0], parts[1]
    suffix = None
    if len(parts) == 3:
        if not is_name_suffix(parts[2]):
            log.debug(f"normalize_author: '{s}' -> unchanged (not a suffix: {parts[2]})")
            return s
        suffix = parts[2]

    if len(last.split()) >= 2 and len(first_middle.split()) >= 2:
        log.debug(f"normalize_author: '{s}' -> unchanged (looks like two authors)")
        return s

    if order == AuthorOrder.FIRST_LAST:
        result = f"{first_middle} {last}"
    else:
        result = f"{last}, {first_middle}"
    if suffix:
        result = f"{result}, {suffix}"

    result = collapse_whitespace(result).strip()
    log.debug(f"normalize_author({order}): '{text}' -> '{result}'")
    return result


def infer_author_from_filename(stem: str | None) -> str | None:
    """Recover an author from a filename like "Some Title -- Mike Barnes".

    Only the explicit " -- " separator is trusted. Tails that look like ids
    (fewer than 2 letters, more digits than letters) or metadata dumps
    (over 60 chars) are rejected.
    """
    if not stem or not stem.strip():
        return None

    idx = stem.rfind(_FILENAME_AUTHOR_SEPARATOR)
    if idx < 0:
        return None

    candidate = stem[idx + len(_FILENAME_AUTHOR_SEPARATOR) :].strip()
    if not candidate:
        return None

    letters = sum(1 for ch in candidate if ch.isalpha())
    digits = sum(1 for ch in candidate if ch.isdigit())
    if letters < 2 or digits > letters:
        log.debug(f"infer_author_from_filename: rejected '{candidate}' (id-like)")
        return None
    if len(candidate) > _MAX_INFERRED_AUTHOR_LENGTH:
        log.debug(f"infer_author_from_filename: rejected '{candidate}' (too long)")
        return None

    return collapse_whitespace(candidate)


def join_authors(names: Iterable[str]) -> str:
    """Join author names with ", ", or "Unknown Author" when there are none."""
    cleaned = [n for n in names if n and n.strip()]
    return AUTHOR_JOINER.join(cleaned) if cleaned else UNKNOWN_AUTHOR
