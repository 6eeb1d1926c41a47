from __future__ import annotations

import pytest

from capsync.core.errors import END_BEFORE_START, OVERLAP, CaptionValidationError
from capsync.core.playback import SimulatedPlayback
from capsync.core.session import CaptionSession
from capsync.core.store import CaptionStore
from capsync.core.sync import active_caption
from capsync.schemas.caption import Caption, CaptionDraft


def test_adjacent_caption_scenario() -> None:
    store = CaptionStore.from_candidates(
        [CaptionDraft(start=0, end=5, text="Hi")], duration=10.0
    )

    with pytest.raises(CaptionValidationError) as excinfo:
        store.add(CaptionDraft(start=5, end=5, text="Bye"))
    assert excinfo.value.kind == END_BEFORE_START

    store.add(CaptionDraft(start=5, end=8, text="Bye"))
    assert len(store) == 2

    before = store.captions
    with pytest.raises(CaptionValidationError) as excinfo:
        store.add(CaptionDraft(start=3, end=6, text="X"))
    assert excinfo.value.kind == OVERLAP
    assert store.captions == before

    # Both captions contain t=5; the earlier one in the sequence wins.
    assert active_caption(5, store.captions) == "Hi"
    assert active_caption(5.01, store.captions) == "Bye"


class _TimelineSurface:
    def __init__(self) -> None:
        self.timeline: list[str | None] = []

    def show_captions(self, captions, edit_cursor) -> None:
        return None

    def show_error(self, error) -> None:
        raise AssertionError(f"unexpected error: {error!r}")

    def clear_error(self) -> None:
        return None

    def show_active_caption(self, text: str | None) -> None:
        self.timeline.append(text)

    def show_playback_error(self, message: str) -> None:
        raise AssertionError(message)


def test_simulated_playback_drives_session() -> None:
    surface = _TimelineSurface()
    session = CaptionSession(surface)
    session.add_caption(Caption(start=0.5, end=1.0, text="a"))
    session.add_caption(Caption(start=1.0, end=2.0, text="b"))
    surface.timeline.clear()

    SimulatedPlayback(2.5, 0.5).run(session)

    # t=1.0 sits on the shared boundary and still shows "a".
    assert surface.timeline == [None, "a", "a", "b", "b", None]
    assert session.playback.duration == pytest.approx(2.5)
