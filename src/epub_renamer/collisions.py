"""Batch-wide filename collision resolution.

Names are compared case-insensitively. A batch owns one UsedNameSet, passed
explicitly into every call; it starts empty and only grows. Proposals are
resolved in input order, so the first item with a given name keeps it and
later ones get " (1)", " (2)", ...
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable, Iterator

from loguru import logger

from .models import ProposedName

log = logger.bind(stage="collisions")

ExistsProbe = Callable[[str], bool]


class UsedNameSet:
    """Case-insensitive set of filenames already assigned in this batch."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        # Map: casefolded name -> name as first assigned
        self._names: dict[str, str] = {}
        for name in names:
            self.add(name)

    def add(self, name: str) -> None:
        self._names.setdefault(name.casefold(), name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names.values())


class ExistingNames:
    """Read-only snapshot of the filenames in a destination directory.

    Scanned once at batch start; lookups are case-insensitive and O(1).
    A missing directory is an empty scope.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names = frozenset(n.casefold() for n in names)

    @classmethod
    def from_directory(cls, directory: Path) -> ExistingNames:
        if not directory.is_dir():
            log.debug(f"Destination does not exist yet: {directory}")
            return cls()
        names = os.listdir(directory)
        log.info(f"Destination scope: {len(names)} existing entries under {directory}")
        return cls(names)

    def __call__(self, name: str) -> bool:
        return name.casefold() in self._names

    def __len__(self) -> int:
        return len(self._names)


def split_extension(filename: str) -> tuple[str, str]:
    """Split "Title - Author.epub" into ("Title - Author", ".epub").

    A "suffix" containing whitespace is not an extension ("J. Doe").
    """
    base, ext = os.path.splitext(filename)
    if not ext or any(ch.isspace() for ch in ext):
        return filename, ""
    return base, ext


def resolve_collision(
    candidate: str,
    used_names: UsedNameSet,
    exists: ExistsProbe | None = None,
) -> str:
    """Return a name unique within used_names and not reported by exists.

    The result is registered in used_names before returning.
    """
    base, ext = split_extension(candidate)
    resolved = candidate
    n = 1
    while resolved in used_names or (exists is not None and exists(resolved)):
        resolved = f"{base} ({n}){ext}"
        n += 1

    if resolved != candidate:
        log.debug(f"Collision: '{candidate}' -> '{resolved}'")
    used_names.add(resolved)
    return resolved


def resolve_proposal(
    proposal: ProposedName,
    used_names: UsedNameSet,
    exists: ExistsProbe | None = None,
) -> ProposedName:
    """Resolve one ProposedName in place, rewriting its stem if needed."""
    resolved = resolve_collision(proposal.filename, used_names, exists)
    if proposal.extension and resolved.endswith(proposal.extension):
        proposal.stem = resolved[: -len(proposal.extension)]
    else:
        proposal.stem = resolved
    return proposal


def resolve_batch(
    proposals: Iterable[ProposedName],
    used_names: UsedNameSet,
    exists: ExistsProbe | None = None,
) -> list[ProposedName]:
    """Resolve proposals in input order (not sorted)."""
    return [resolve_proposal(p, used_names, exists) for p in proposals]
