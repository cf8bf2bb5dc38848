"""Batch planning -- turn metadata records into unique target filenames.

For each item, strictly in input order and to completion before the next:

    1. title fallback (source filename stem when the title is missing)
    2. author fallback (" -- Author" filename tail, else "Unknown Author")
    3. author reordering (NormalizationOptions.author_order)
    4. smart title case of title and each author
    5. stem + filename build (sanitized twice)
    6. collision resolution against the batch's UsedNameSet and the probe

Nothing here touches the filesystem except through the caller's probe; the
result is a plan, not an action.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Iterable

from loguru import logger

from .authors import infer_author_from_filename, join_authors, normalize_author
from .collisions import ExistsProbe, UsedNameSet, resolve_proposal
from .models import (
    DEFAULT_EXTENSION,
    MAX_STEM_LENGTH,
    AuthorOrder,
    NormalizationOptions,
    ProposedName,
    SourceItem,
    TitleCaseDomain,
)
from .sanitize import collapse_whitespace
from .stem import build_filename, build_stem, normalize_extension
from .titlecase import title_case

log = logger.bind(stage="planner")


@dataclass(frozen=True)
class ChangeNote:
    """A before/after pair worth showing in the preview summary."""

    source_id: str
    subject: str
    before: str
    after: str


@dataclass
class BatchPlan:
    """Ordered proposals plus what the pipeline noticed along the way."""

    proposals: list[ProposedName] = field(default_factory=list)
    missing_title: list[str] = field(default_factory=list)
    missing_author: list[str] = field(default_factory=list)
    inferred_authors: list[ChangeNote] = field(default_factory=list)
    author_changes: list[ChangeNote] = field(default_factory=list)
    title_case_changes: list[ChangeNote] = field(default_factory=list)
    cancelled: bool = False

    @property
    def has_summary(self) -> bool:
        return bool(
            self.missing_title
            or self.missing_author
            or self.inferred_authors
            or self.author_changes
            or self.title_case_changes
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "proposals": [
                {**asdict(p), "filename": p.filename} for p in self.proposals
            ],
            "missing_title": list(self.missing_title),
            "missing_author": list(self.missing_author),
            "inferred_authors": [asdict(n) for n in self.inferred_authors],
            "author_changes": [asdict(n) for n in self.author_changes],
            "title_case_changes": [asdict(n) for n in self.title_case_changes],
            "cancelled": self.cancelled,
        }


def propose_name(
    item: SourceItem,
    options: NormalizationOptions,
    plan: BatchPlan,
    extension: str = DEFAULT_EXTENSION,
    max_stem_length: int = MAX_STEM_LENGTH,
) -> ProposedName:
    """Build the (not yet collision-resolved) ProposedName for one item.

    Metadata gaps and visible changes are recorded on plan.
    """
    source = item.source_name
    raw_title = collapse_whitespace(item.metadata.title or "").strip()
    if not raw_title:
        plan.missing_title.append(source)
    title = raw_title or item.source_stem

    authors = [
        collapse_whitespace(a).strip() for a in item.metadata.authors if a and a.strip()
    ]
    if not authors:
        inferred = infer_author_from_filename(item.source_stem)
        if inferred:
            authors.append(inferred)
            plan.inferred_authors.append(ChangeNote(source, "author", "", inferred))
            log.debug(f"Inferred author from filename: {source} -> {inferred}")
        else:
            plan.missing_author.append(source)

    if authors and options.author_order != AuthorOrder.AS_IS:
        before = join_authors(authors)
        authors = [normalize_author(a, options.author_order) for a in authors]
        after = join_authors(authors)
        if before != after:
            plan.author_changes.append(ChangeNote(source, "authors", before, after))

    if options.apply_title_case:
        cased_title = title_case(title, TitleCaseDomain.TITLE)
        if cased_title != title:
            plan.title_case_changes.append(ChangeNote(source, "title", title, cased_title))
        title = cased_title

        if authors:
            before = join_authors(authors)
            authors = [title_case(a, TitleCaseDomain.AUTHOR) for a in authors]
            after = join_authors(authors)
            if before != after:
                plan.title_case_changes.append(
                    ChangeNote(source, "authors", before, after)
                )

    stem = build_stem(
        title,
        join_authors(authors),
        options.strip_diacritics,
        max_length=max_stem_length,
    )
    ext = normalize_extension(extension)
    filename = build_filename(stem, ext, options.strip_diacritics)
    if ext and filename.endswith(ext):
        return ProposedName(item.source_id, filename[: -len(ext)], ext)
    return ProposedName(item.source_id, filename, "")


def plan_batch(
    items: Iterable[SourceItem],
    options: NormalizationOptions,
    exists: ExistsProbe | None = None,
    extension: str = DEFAULT_EXTENSION,
    max_stem_length: int = MAX_STEM_LENGTH,
    should_stop: Callable[[], bool] | None = None,
    used_names: UsedNameSet | None = None,
) -> BatchPlan:
    """Plan target filenames for a batch, one ProposedName per item.

    Each item is finished (built and registered as used) before the next one
    starts. should_stop is checked between items; a stopped plan keeps the
    proposals made so far and sets cancelled.
    """
    plan = BatchPlan()
    used = used_names if used_names is not None else UsedNameSet()

    for item in items:
        if should_stop is not None and should_stop():
            log.info(f"Batch stopped after {len(plan.proposals)} items")
            plan.cancelled = True
            break
        proposal = propose_name(item, options, plan, extension, max_stem_length)
        resolve_proposal(proposal, used, exists)
        log.debug(f"Planned: {item.source_id} -> {proposal.filename}")
        plan.proposals.append(proposal)

    log.info(
        f"Planned {len(plan.proposals)} names "
        f"(missing title: {len(plan.missing_title)}, "
        f"missing author: {len(plan.missing_author)})"
    )
    return plan
