"""Core enums, constants, and type definitions for the EPUB renamer.

Enums:
    AuthorOrder      -- Requested display order for author names (as-is, firstlast,
                        lastfirst). Parsed leniently via parse_author_order().
    TitleCaseDomain  -- Which rule set the title-caser applies (title, author).
                        The author domain also keeps name particles lowercase.
    AuthorSourceKind -- Which metadata field the author list was read from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from .errors import ConfigError


class AuthorOrder(StrEnum):
    AS_IS = "as-is"
    FIRST_LAST = "firstlast"
    LAST_FIRST = "lastfirst"


class TitleCaseDomain(StrEnum):
    TITLE = "title"
    AUTHOR = "author"


class AuthorSourceKind(StrEnum):
    AUTHOR_LIST = "author_list"
    AUTHORS = "authors"
    SINGLE_AUTHOR = "author"
    NONE = "none"


_AUTHOR_ORDER_ALIASES: dict[str, AuthorOrder] = {
    "as-is": AuthorOrder.AS_IS,
    "asis": AuthorOrder.AS_IS,
    "as_is": AuthorOrder.AS_IS,
    "firstlast": AuthorOrder.FIRST_LAST,
    "first-last": AuthorOrder.FIRST_LAST,
    "first_last": AuthorOrder.FIRST_LAST,
    "lastfirst": AuthorOrder.LAST_FIRST,
    "last-first": AuthorOrder.LAST_FIRST,
    "last_first": AuthorOrder.LAST_FIRST,
}


def parse_author_order(value: str | AuthorOrder) -> AuthorOrder:
    """Parse an author order name, accepting dash/underscore spellings.

    Raises ConfigError for anything outside the closed set -- the pipeline
    itself never sees an invalid order.
    """
    if isinstance(value, AuthorOrder):
        return value
    order = _AUTHOR_ORDER_ALIASES.get(str(value).strip().lower())
    if order is None:
        raise ConfigError(
            f"Invalid author format: {value!r} (expected: as-is | firstlast | lastfirst)"
        )
    return order


# Stem length cap, leaves room for the extension and a collision suffix
MAX_STEM_LENGTH = 120

UNTITLED = "Untitled"
UNKNOWN_AUTHOR = "Unknown Author"
AUTHOR_JOINER = ", "
DEFAULT_EXTENSION = ".epub"

RESERVED_DEVICE_NAMES: frozenset[str] = frozenset(
    {"CON", "PRN", "AUX", "NUL"}
    | {f"COM{n}" for n in range(1, 10)}
    | {f"LPT{n}" for n in range(1, 10)}
)

# Style-guide-ish, not exhaustive
MINOR_WORDS: frozenset[str] = frozenset(
    {
        "and",
        "or",
        "the",
        "a",
        "an",
        "in",
        "on",
        "of",
        "to",
        "at",
        "by",
        "for",
        "from",
        "nor",
        "but",
        "as",
        "per",
        "vs",
        "via",
        "with",
        "into",
        "onto",
        "off",
        "up",
        "down",
    }
)

# Name particles kept lowercase mid-name (author domain only).
# "le"/"la" are left out on purpose: "Ursula K. Le Guin".
AUTHOR_PARTICLES: frozenset[str] = frozenset(
    {"del", "de", "della", "der", "van", "von", "da", "du", "di"}
)

NAME_SUFFIXES: frozenset[str] = frozenset({"jr", "sr", "ii", "iii", "iv", "v"})

# Lowercase spellings that are forced upper-case. Kept small: every entry
# here overrides ordinary capitalization for a real word.
KNOWN_ACRONYMS: frozenset[str] = frozenset(
    {
        "nasa",
        "cia",
        "fbi",
        "nsa",
        "kgb",
        "mi5",
        "mi6",
        "nato",
        "ussr",
        "usa",
        "bbc",
        "ibm",
        "dna",
        "rna",
        "ufo",
        "ceo",
        "cpu",
        "gpu",
        "html",
        "css",
        "sql",
        "api",
        "http",
        "usb",
        "nyc",
        "wwi",
        "wwii",
        # roman numerals (regnal numbers, volume numbers)
        "ii",
        "iii",
        "iv",
        "vii",
        "viii",
        "ix",
        "xii",
        "xiii",
        "xiv",
        "xv",
        "xx",
    }
)


@dataclass(frozen=True)
class RawMetadata:
    """Title and author list as received from the metadata reader."""

    title: str | None = None
    authors: tuple[str, ...] = ()


@dataclass(frozen=True)
class NormalizationOptions:
    """Per-batch switches. Immutable for the duration of a run."""

    strip_diacritics: bool = False
    apply_title_case: bool = True
    author_order: AuthorOrder = AuthorOrder.FIRST_LAST


@dataclass
class Token:
    """One space-delimited word during a single title-case pass."""

    leading: str
    core: str
    trailing: str
    segments: list[str] = field(default_factory=list)

    def render(self) -> str:
        return self.leading + "-".join(self.segments) + self.trailing


@dataclass
class ProposedName:
    """Planned target filename for one source item.

    Created once by the planner; only the collision resolver rewrites stem.
    """

    source_id: str
    stem: str
    extension: str

    @property
    def filename(self) -> str:
        return f"{self.stem}{self.extension}"


@dataclass(frozen=True)
class SourceItem:
    """One input document: its original path/name plus extracted metadata."""

    source_id: str
    metadata: RawMetadata

    @property
    def source_name(self) -> str:
        return Path(self.source_id).name

    @property
    def source_stem(self) -> str:
        return Path(self.source_id).stem


@dataclass(frozen=True)
class AuthorSource:
    """Author names tagged with the metadata field they came from.

    Resolved once at the boundary; the pipeline only ever sees names().
    """

    kind: AuthorSourceKind
    values: tuple[str, ...] = ()

    def names(self) -> tuple[str, ...]:
        return tuple(v.strip() for v in self.values if v and v.strip())
