from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Protocol

from capsync.core.errors import CaptionError
from capsync.core.store import CaptionStore
from capsync.core.sync import find_active_caption
from capsync.schemas.caption import Caption, CaptionDraft
from capsync.schemas.playback import PlaybackState

logger = logging.getLogger(__name__)

PLAYBACK_ERROR_MESSAGE = (
    "Error loading video. Please ensure the URL is correct and points to a "
    "supported video platform or direct file (e.g., .mp4)."
)


class PresentationSurface(Protocol):
    def show_captions(
        self, captions: Sequence[Caption], edit_cursor: int | None
    ) -> None:
        ...

    def show_error(self, error: CaptionError) -> None:
        ...

    def clear_error(self) -> None:
        ...

    def show_active_caption(self, text: str | None) -> None:
        ...

    def show_playback_error(self, message: str) -> None:
        ...


@dataclass(frozen=True)
class OperationResult:
    status: str
    message: str
    caption: Caption | None = None
    error: CaptionError | None = None

    @property
    def ok(self) -> bool:
        return self.status == "done"


class CaptionSession:
    """Connects a caption store to a playback source and a presentation surface.

    Playback notifications recompute the active caption; user operations go
    through the store and report either the new caption list or the error.
    """

    def __init__(
        self,
        surface: PresentationSurface,
        store: CaptionStore | None = None,
    ) -> None:
        self.surface = surface
        self.store = store if store is not None else CaptionStore()
        self._playback = PlaybackState(duration=self.store.duration)
        self._draft = CaptionDraft()
        self._playback_error: str | None = None

    @property
    def playback(self) -> PlaybackState:
        return self._playback

    @property
    def draft(self) -> CaptionDraft:
        return self._draft

    @property
    def playback_error(self) -> str | None:
        return self._playback_error

    @property
    def active_text(self) -> str | None:
        caption = find_active_caption(self._playback.current_time, self.store.captions)
        return caption.text if caption is not None else None

    def set_draft_field(self, field: str, value: str | float) -> CaptionDraft:
        self._draft = self._draft.with_field(field, value)
        return self._draft

    def reset_draft(self) -> None:
        self._draft = CaptionDraft()

    def _run(
        self, operation: Callable[[], Caption], success_message: str
    ) -> OperationResult:
        try:
            caption = operation()
        except CaptionError as exc:
            self.surface.show_error(exc)
            return OperationResult(
                status="failed", message=exc.message, error=exc
            )
        self.surface.clear_error()
        self.surface.show_captions(self.store.captions, self.store.edit_cursor)
        self._emit_active_caption()
        return OperationResult(status="done", message=success_message, caption=caption)

    def add_caption(self, candidate: CaptionDraft | Caption) -> OperationResult:
        return self._run(lambda: self.store.add(candidate), "Caption added.")

    def update_caption(
        self, index: int, candidate: CaptionDraft | Caption
    ) -> OperationResult:
        return self._run(
            lambda: self.store.update(index, candidate), f"Caption #{index + 1} updated."
        )

    def delete_caption(self, index: int) -> OperationResult:
        editing = self.store.edit_cursor == index
        result = self._run(
            lambda: self.store.delete(index), f"Caption #{index + 1} deleted."
        )
        if result.ok and editing:
            # Clear the removed caption from the form.
            self.reset_draft()
        return result

    def begin_edit(self, index: int) -> OperationResult:
        result = self._run(
            lambda: self.store.begin_edit(index), f"Editing caption #{index + 1}."
        )
        if result.ok and result.caption is not None:
            self._draft = result.caption.to_draft()
        return result

    def cancel_edit(self) -> None:
        self.store.cancel_edit()
        self.reset_draft()
        self.surface.clear_error()
        self.surface.show_captions(self.store.captions, self.store.edit_cursor)

    def submit_draft(self) -> OperationResult:
        """Add the draft, or apply it to the caption being edited."""
        cursor = self.store.edit_cursor
        if cursor is None:
            result = self.add_caption(self._draft)
        else:
            draft = self._draft
            result = self._run(
                lambda: self._apply_edit(cursor, draft), f"Caption #{cursor + 1} updated."
            )
        if result.ok:
            self.reset_draft()
        return result

    def _apply_edit(self, index: int, candidate: CaptionDraft) -> Caption:
        caption = self.store.update(index, candidate)
        self.store.cancel_edit()
        return caption

    def on_time_update(self, time: float) -> None:
        self._playback = replace(self._playback, current_time=float(time))
        self._emit_active_caption()

    def on_duration_known(self, duration: float) -> None:
        self.store.duration = duration
        self._playback = replace(self._playback, duration=self.store.duration)
        logger.debug("Video duration set to %.3f", self.store.duration)

    def on_playback_error(self, detail: str | None = None) -> None:
        if detail:
            logger.warning("Playback error: %s", detail)
        self._playback_error = PLAYBACK_ERROR_MESSAGE
        self.surface.show_playback_error(PLAYBACK_ERROR_MESSAGE)
        self.surface.show_active_caption(None)

    def _emit_active_caption(self) -> None:
        if self._playback_error is not None:
            # The error overlay replaces the caption.
            self.surface.show_active_caption(None)
            return
        self.surface.show_active_caption(self.active_text)
