from __future__ import annotations

import math
from collections.abc import Sequence

from capsync.core.errors import (
    EMPTY_TEXT,
    END_BEFORE_START,
    NEGATIVE,
    NOT_NUMERIC,
    OUT_OF_DURATION,
    OVERLAP,
    CaptionValidationError,
)
from capsync.schemas.caption import Caption, CaptionDraft


def parse_seconds(value: object, *, field: str) -> float:
    """Parse a start/end value typed by a user into seconds."""
    if isinstance(value, bool):
        raise CaptionValidationError(
            NOT_NUMERIC, f"{field.capitalize()} time must be a number, got {value!r}."
        )
    if isinstance(value, (int, float)):
        seconds = float(value)
    elif isinstance(value, str):
        try:
            seconds = float(value.strip())
        except ValueError as exc:
            raise CaptionValidationError(
                NOT_NUMERIC,
                f"{field.capitalize()} time must be a number, got {value!r}.",
            ) from exc
    else:
        raise CaptionValidationError(
            NOT_NUMERIC, f"{field.capitalize()} time must be a number, got {value!r}."
        )
    if not math.isfinite(seconds):
        raise CaptionValidationError(
            NOT_NUMERIC, f"{field.capitalize()} time must be finite, got {value!r}."
        )
    return seconds


def ranges_overlap(start: float, end: float, other_start: float, other_end: float) -> bool:
    # Half-open: touching ranges do not overlap.
    return start < other_end and end > other_start


def validate_caption(
    candidate: CaptionDraft | Caption,
    existing: Sequence[Caption],
    duration: float,
    exclude_index: int | None = None,
) -> Caption:
    """Validate ``candidate`` against ``existing`` and return it as a Caption.

    Checks run cheapest first and stop at the first failure:
    numeric bounds, non-negative bounds, ordering, text, known duration,
    then the overlap scan. ``duration <= 0`` means the duration is unknown and
    the duration check is skipped. ``exclude_index`` names the caption being
    replaced, which never conflicts with itself.

    The returned caption is normalized: float bounds, and text with
    surrounding whitespace stripped.
    """
    start = parse_seconds(candidate.start, field="start")
    end = parse_seconds(candidate.end, field="end")

    if start < 0 or end < 0:
        raise CaptionValidationError(
            NEGATIVE, f"Times must not be negative (start={start:g}, end={end:g})."
        )
    if end <= start:
        raise CaptionValidationError(
            END_BEFORE_START,
            f"End time must be greater than start time (start={start:g}, end={end:g}).",
        )

    text = candidate.text.strip() if isinstance(candidate.text, str) else ""
    if not text:
        raise CaptionValidationError(EMPTY_TEXT, "Caption text must not be empty.")

    if duration > 0 and (start >= duration or end > duration):
        raise CaptionValidationError(
            OUT_OF_DURATION,
            f"Caption must lie within the video duration of {duration:g} seconds.",
        )

    for index, other in enumerate(existing):
        if index == exclude_index:
            continue
        if ranges_overlap(start, end, other.start, other.end):
            raise CaptionValidationError(
                OVERLAP,
                f"Caption {start:g}-{end:g} overlaps caption #{index + 1} "
                f"({other.start:g}-{other.end:g}).",
            )

    return Caption(start=start, end=end, text=text)
