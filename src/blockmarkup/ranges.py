"""Grouping of character runs into entity and style pieces."""

from __future__ import annotations

from collections.abc import Sequence

from .models import CharacterRun

# (text, active style labels)
StylePiece = tuple[str, frozenset[str]]
# (entity key or None, style pieces covering the entity range)
EntityPiece = tuple[str | None, list[StylePiece]]


def get_entity_ranges(text: str, runs: Sequence[CharacterRun]) -> list[EntityPiece]:
    """Split text into entity pieces, each subdivided into style pieces.

    Adjacent runs that reference the same entity (including "no entity") form a
    single entity piece. Inside it, adjacent runs with equal style sets are
    concatenated into one style piece.

    Args:
        text: The block text the runs index into
        runs: Contiguous runs covering ``text``

    Returns:
        List of (entity_key, [(text, styles), ...]) in text order
    """
    pieces: list[EntityPiece] = []
    for run in runs:
        chunk = text[run.start : run.end]
        if not chunk:
            continue
        if not pieces or pieces[-1][0] != run.entity:
            pieces.append((run.entity, [(chunk, run.styles)]))
            continue
        style_pieces = pieces[-1][1]
        last_text, last_styles = style_pieces[-1]
        if last_styles == run.styles:
            style_pieces[-1] = (last_text + chunk, last_styles)
        else:
            style_pieces.append((chunk, run.styles))
    return pieces
