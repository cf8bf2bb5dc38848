"""Boundary between an upstream metadata reader and the naming pipeline.

The reader (EPUB container parsing lives outside this package) writes a JSON
manifest, one record per document:

    [
      {"source": "books/dune.epub", "title": "dune", "authors": ["Herbert, Frank"]},
      {"source": "books/x.epub", "title": null, "author": "Jane Doe"}
    ]

Different reader versions name the author field differently. The field is
resolved once here into an AuthorSource; the pipeline never probes field
names itself.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from loguru import logger

from .errors import ManifestError
from .models import AuthorSource, AuthorSourceKind, RawMetadata, SourceItem

log = logger.bind(stage="metadata")


def _as_names(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(v for v in value if isinstance(v, str))
    return ()


def resolve_author_source(record: Mapping[str, Any]) -> AuthorSource:
    """Pick the author field: author_list, then authors, then author.

    The first field that yields at least one non-blank name wins.
    """
    for kind in (
        AuthorSourceKind.AUTHOR_LIST,
        AuthorSourceKind.AUTHORS,
        AuthorSourceKind.SINGLE_AUTHOR,
    ):
        source = AuthorSource(kind, _as_names(record.get(kind.value)))
        if source.names():
            return source
    return AuthorSource(AuthorSourceKind.NONE)


def record_to_item(record: Mapping[str, Any]) -> SourceItem:
    """Convert one manifest record into a SourceItem."""
    source_id = record.get("source")
    if not isinstance(source_id, str) or not source_id.strip():
        raise ManifestError(f"record has no 'source': {record!r}")

    title = record.get("title")
    if title is not None and not isinstance(title, str):
        title = str(title)

    authors = resolve_author_source(record)
    log.debug(f"record_to_item: source={source_id} author_source={authors.kind}")
    return SourceItem(
        source_id=source_id,
        metadata=RawMetadata(title=title, authors=authors.names()),
    )


def load_manifest(path: Path) -> list[SourceItem]:
    """Read a JSON manifest into SourceItems, preserving record order."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise ManifestError(f"not valid UTF-8: {e}", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"invalid JSON: {e}", path=str(path)) from e
    except OSError as e:
        raise ManifestError(f"cannot read manifest: {e}", path=str(path)) from e

    if not isinstance(data, list):
        raise ManifestError("expected a JSON array of records", path=str(path))

    items = []
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise ManifestError(f"record {i} is not an object", path=str(path))
        items.append(record_to_item(record))

    log.info(f"Loaded {len(items)} records from {path}")
    return items
