"""EPUB Renamer -- propose safe, consistent, collision-free filenames for EPUBs.

Core modules:
    sanitize   -- Filename sanitization: punctuation folding, optional diacritic
                  stripping, forbidden-character replacement, reserved device names.
                  Total: never fails, never returns an empty string ("Untitled").
    titlecase  -- Smart title casing driven by an ordered rule list (acronym ->
                  initial -> minor word -> capitalize) with clause-boundary tracking.
    authors    -- Conservative "Last, First" reordering with guardrails against
                  several authors crammed into one field; " -- Author" filename
                  inference.
    stem       -- "{title} - {authors}" stems capped at 120 chars.
    collisions -- Case-insensitive batch uniqueness (" (1)", " (2)", ...) against
                  a per-batch UsedNameSet and a destination probe.
    planner    -- Per-item pipeline in input order; returns a BatchPlan with
                  proposals and metadata-gap/change summaries.
    metadata   -- JSON manifest boundary; resolves the author field once into an
                  AuthorSource (author_list | authors | author | none).
    report     -- Preview rendering of a plan.
    config     -- Configuration via pydantic-settings, loguru setup.
    cli        -- Click CLI entry point (preview only, never copies or moves).
"""
