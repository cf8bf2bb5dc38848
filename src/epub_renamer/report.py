"""Preview output for a BatchPlan."""

from __future__ import annotations

import json

import click

from .planner import BatchPlan, ChangeNote

RULE = "-" * 80


def abbreviate(value: str, max_length: int = 80) -> str:
    """Cut value to max_length, ending in "..." when shortened."""
    if not value or len(value) <= max_length:
        return value
    if max_length <= 3:
        return value[: max(0, max_length)]
    return value[: max_length - 3] + "..."


def _describe(note: ChangeNote) -> str:
    if not note.before:
        return f'File: {note.source_id} | Inferred {note.subject}: "{abbreviate(note.after)}"'
    return (
        f"File: {note.source_id} | {note.subject.capitalize()}: "
        f'"{abbreviate(note.before)}" -> "{abbreviate(note.after)}"'
    )


def summary_sections(plan: BatchPlan) -> list[tuple[str, list[str]]]:
    """Non-empty summary sections as (heading, lines)."""
    sections = [
        ("Missing author", list(plan.missing_author)),
        ("Missing title", list(plan.missing_title)),
        ("Author inferred from filename", [_describe(n) for n in plan.inferred_authors]),
        ("Authorformat-adjusted", [_describe(n) for n in plan.author_changes]),
        ("Titlecase-adjusted", [_describe(n) for n in plan.title_case_changes]),
    ]
    return [(heading, lines) for heading, lines in sections if lines]


def render_plan(plan: BatchPlan) -> None:
    """Echo "original  =>  proposed" lines, a total and the summary."""
    click.echo("")
    click.echo("Planned renames (preview):")
    click.echo(RULE)
    for proposal in plan.proposals:
        original = click.format_filename(proposal.source_id, shorten=True)
        click.echo(f"{original}  =>  {proposal.filename}")
    click.echo(RULE)
    click.echo(f"Total: {len(plan.proposals)} file(s)")
    if plan.cancelled:
        click.echo("Stopped early: remaining items were not planned.")
    click.echo("")

    sections = summary_sections(plan)
    if not sections:
        return

    click.echo("Summary:")
    click.echo(RULE)
    for i, (heading, lines) in enumerate(sections):
        if i:
            click.echo("")
        click.echo(f"{heading} ({len(lines)}):")
        for line in lines:
            click.echo(f"  - {line}")
    click.echo(RULE)
    click.echo("")


def plan_to_json(plan: BatchPlan) -> str:
    return json.dumps(plan.to_dict(), indent=2, ensure_ascii=False)
