from __future__ import annotations

from collections.abc import Iterable

from capsync.schemas.caption import Caption


def find_active_caption(time: float, captions: Iterable[Caption]) -> Caption | None:
    """Return the first caption whose closed range ``[start, end]`` holds ``time``.

    Adjacent captions share their boundary instant; the earlier one in
    stored order wins. Captions are not re-validated here.
    """
    for caption in captions:
        if caption.start <= time <= caption.end:
            return caption
    return None


def active_caption(time: float, captions: Iterable[Caption]) -> str:
    caption = find_active_caption(time, captions)
    return caption.text if caption is not None else ""
