"""Field text cleaning: trim then transform.

Applied by the record schema to each raw field before the column parses it.
"""

from __future__ import annotations

from flatbind.domain.types import StringTransform, StringTrim


def clean_text(
    value: str | None,
    trim: StringTrim = StringTrim.END,
    transform: StringTransform = StringTransform.EMPTY_TO_NULL,
) -> str | None:
    """Trim and transform a raw field value.

    ``None`` is only turned into ``""`` by ``NULL_TO_EMPTY``; trimming never
    applies to it. ``EMPTY_TO_NULL`` runs after trimming, so whitespace-only
    text becomes None when any trim is active.
    """
    if value is None:
        return "" if transform is StringTransform.NULL_TO_EMPTY else None

    match trim:
        case StringTrim.BOTH:
            text = value.strip()
        case StringTrim.START:
            text = value.lstrip()
        case StringTrim.END:
            text = value.rstrip()
        case _:
            text = value

    if transform is StringTransform.EMPTY_TO_NULL and not text:
        return None
    return text
