from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from capsync.core.errors import CaptionIndexError, CaptionValidationError
from capsync.core.validation import validate_caption
from capsync.schemas.caption import Caption, CaptionDraft

logger = logging.getLogger(__name__)


class CaptionStore:
    """Captions in insertion order plus the position currently being edited.

    Every mutation either applies completely or raises a ``CaptionError``
    and leaves the store untouched.
    """

    def __init__(self, duration: float = 0.0) -> None:
        self._captions: list[Caption] = []
        self._edit_cursor: int | None = None
        self.duration = duration

    @classmethod
    def from_candidates(
        cls,
        candidates: Iterable[CaptionDraft | Caption],
        *,
        duration: float = 0.0,
    ) -> CaptionStore:
        store = cls(duration=duration)
        for candidate in candidates:
            store.add(candidate)
        return store

    @property
    def duration(self) -> float:
        return self._duration

    @duration.setter
    def duration(self, value: float) -> None:
        # Unknown durations are kept as 0 so validation skips the bound check.
        self._duration = float(value) if value and value > 0 else 0.0

    @property
    def captions(self) -> tuple[Caption, ...]:
        return tuple(self._captions)

    @property
    def edit_cursor(self) -> int | None:
        return self._edit_cursor

    def __len__(self) -> int:
        return len(self._captions)

    def __iter__(self) -> Iterator[Caption]:
        return iter(tuple(self._captions))

    def __getitem__(self, index: int) -> Caption:
        self._check_index(index)
        return self._captions[index]

    def _check_index(self, index: int) -> None:
        if not isinstance(index, int) or isinstance(index, bool):
            raise CaptionIndexError(index, len(self._captions))
        if index < 0 or index >= len(self._captions):
            raise CaptionIndexError(index, len(self._captions))

    def validate(
        self,
        candidate: CaptionDraft | Caption,
        exclude_index: int | None = None,
    ) -> Caption:
        return validate_caption(
            candidate,
            self._captions,
            self._duration,
            exclude_index=exclude_index,
        )

    def add(self, candidate: CaptionDraft | Caption) -> Caption:
        try:
            caption = self.validate(candidate)
        except CaptionValidationError as exc:
            logger.info("Rejected new caption (%s): %s", exc.kind, exc.message)
            raise
        self._captions.append(caption)
        logger.debug(
            "Added caption #%d %.3f-%.3f", len(self._captions), caption.start, caption.end
        )
        return caption

    def update(self, index: int, candidate: CaptionDraft | Caption) -> Caption:
        self._check_index(index)
        try:
            caption = self.validate(candidate, exclude_index=index)
        except CaptionValidationError as exc:
            logger.info(
                "Rejected update of caption #%d (%s): %s", index + 1, exc.kind, exc.message
            )
            raise
        self._captions[index] = caption
        logger.debug("Updated caption #%d %.3f-%.3f", index + 1, caption.start, caption.end)
        return caption

    def delete(self, index: int) -> Caption:
        """Remove the caption at ``index``.

        The edit cursor is cleared when it points at the removed caption. A
        cursor past ``index`` is left as the same raw position, so it now
        names the caption that followed the one it used to name (or nothing,
        if it was the last position).
        """
        self._check_index(index)
        removed = self._captions.pop(index)
        if self._edit_cursor == index:
            self._edit_cursor = None
        logger.debug("Deleted caption #%d", index + 1)
        return removed

    def begin_edit(self, index: int) -> Caption:
        self._check_index(index)
        self._edit_cursor = index
        return self._captions[index]

    def cancel_edit(self) -> None:
        self._edit_cursor = None
