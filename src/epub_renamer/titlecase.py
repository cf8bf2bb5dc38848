"""Smart title casing for book titles and author names.

Each space-delimited word is split into leading punctuation, a core and
trailing punctuation; the core is split on hyphens and every segment is
run through an ordered rule list (first match wins):

    acronym  -- NASA, CIA, MI6, roman numerals      -> upper-case
    initial  -- single letter followed by "."       -> upper-case
    minor    -- of, the, and ... mid-clause         -> lower-case
    default  -- everything else                     -> capitalized

A clause boundary (colon, middle dot, closing quote, or a comma followed by
a capitalized word) makes the next word eligible for capitalization even
if it is a minor word: "The Hunt: The Secret Agent".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from loguru import logger

from .models import (
    AUTHOR_PARTICLES,
    KNOWN_ACRONYMS,
    MINOR_WORDS,
    TitleCaseDomain,
    Token,
)

log = logger.bind(stage="titlecase")

_CLAUSE_MARKS = (":", "·", '"', "”", "»")
_APOSTROPHES = ("'", "’")
_APOSTROPHE_PREFIXES = ("O", "D", "L")


@dataclass(frozen=True)
class SegmentContext:
    """Position of a hyphen segment within the whole string."""

    trailing: str
    is_first: bool
    is_last: bool
    after_boundary: bool
    minor_words: frozenset[str]


@dataclass(frozen=True)
class CaseRule:
    name: str
    applies: Callable[[str, SegmentContext], bool]
    transform: Callable[[str], str]


def _is_acronym(segment: str, ctx: SegmentContext) -> bool:
    letters = [ch for ch in segment if ch.isalpha()]
    if len(letters) >= 2 and all(ch.isupper() for ch in letters):
        return True
    # The list only upgrades all-lowercase spellings; "Xi" or "Iv" is left to the author
    return segment.islower() and segment in KNOWN_ACRONYMS


def _is_initial(segment: str, ctx: SegmentContext) -> bool:
    # "A." is an initial, never the article
    return len(segment) == 1 and ctx.trailing.startswith(".")


def _is_minor(segment: str, ctx: SegmentContext) -> bool:
    if ctx.is_first or ctx.is_last or ctx.after_boundary:
        return False
    return segment.lower() in ctx.minor_words


def capitalize_word(segment: str) -> str:
    """Capitalize one hyphen segment.

    Internal capitals are taken as intentional and kept verbatim
    ("McCarthy", "iPhone"). The letter after an apostrophe is raised only
    for O'/D'/L' prefixes, so "Hitchhiker's" stays as it is.
    """
    first_letter = next((i for i, ch in enumerate(segment) if ch.isalpha()), None)
    if first_letter is None:
        return segment
    if any(ch.isupper() for ch in segment[first_letter + 1 :]):
        return segment

    lower = segment.lower()
    if not lower[0].isalpha():
        # "1st", "3d" -- nothing to capitalize at the front
        return lower

    head = lower[0].upper()
    rest = lower[1:]
    if (
        head in _APOSTROPHE_PREFIXES
        and len(rest) >= 2
        and rest[0] in _APOSTROPHES
        and rest[1].isalpha()
    ):
        rest = rest[0] + rest[1].upper() + rest[2:]
    result = head + rest

    if len(result) >= 3 and result.startswith("Mc") and result[2].isalpha():
        result = result[:2] + result[2].upper() + result[3:]
    return result


CASE_RULES: tuple[CaseRule, ...] = (
    CaseRule("acronym", _is_acronym, str.upper),
    CaseRule("initial", _is_initial, str.upper),
    CaseRule("minor", _is_minor, str.lower),
    CaseRule("default", lambda segment, ctx: True, capitalize_word),
)


def apply_case_rules(segment: str, ctx: SegmentContext) -> str:
    """Run segment through CASE_RULES top-down; the first match transforms it."""
    for rule in CASE_RULES:
        if rule.applies(segment, ctx):
            return rule.transform(segment)
    return segment


def tokenize(word: str) -> Token | None:
    """Split a word into leading punctuation, core and trailing punctuation.

    Returns None when the word has no alphanumeric characters at all.
    """
    start, end = 0, len(word)
    while start < end and not word[start].isalnum():
        start += 1
    while end > start and not word[end - 1].isalnum():
        end -= 1
    if start >= end:
        return None
    core = word[start:end]
    return Token(
        leading=word[:start],
        core=core,
        trailing=word[end:],
        segments=core.split("-"),
    )


def _starts_with_upper(word: str) -> bool:
    for ch in word:
        if ch.isalpha():
            return ch.isupper()
    return False


def _opens_clause(trailing: str, next_word: str | None) -> bool:
    """Does the punctuation after this word start a new title segment?"""
    if any(mark in trailing for mark in _CLAUSE_MARKS):
        return True
    # "Narcissus, The Secret Agent" -- a capitalized word after a comma
    # reads as a new segment. Misfires on "Smith, Jones and Co."
    return "," in trailing and next_word is not None and _starts_with_upper(next_word)


def minor_words_for(domain: TitleCaseDomain) -> frozenset[str]:
    if domain == TitleCaseDomain.AUTHOR:
        return MINOR_WORDS | AUTHOR_PARTICLES
    return MINOR_WORDS


def title_case(text: str, domain: TitleCaseDomain = TitleCaseDomain.TITLE) -> str:
    """Apply smart title case to a title or author name.

    Splits on single spaces only; whitespace is expected to be collapsed
    upstream. Empty or whitespace-only input is returned unchanged.
    """
    if not text or not text.strip():
        return text

    minor_words = minor_words_for(domain)
    words = text.split(" ")
    last_index = len(words) - 1
    after_boundary = True
    out: list[str] = []

    for i, word in enumerate(words):
        if not word:
            out.append(word)
            continue
        next_word = words[i + 1] if i < last_index else None

        token = tokenize(word)
        if token is None:
            out.append(word)
            after_boundary = _opens_clause(word, next_word)
            continue

        ctx = SegmentContext(
            trailing=token.trailing,
            is_first=i == 0,
            is_last=i == last_index,
            after_boundary=after_boundary,
            minor_words=minor_words,
        )
        token.segments = [
            apply_case_rules(segment, ctx) if segment else segment
            for segment in token.segments
        ]
        out.append(token.render())
        after_boundary = _opens_clause(token.trailing, next_word)

    result = " ".join(out)
    if result != text:
        log.debug(f"title_case({domain}): '{text}' -> '{result}'")
    return result
