from __future__ import annotations

from dataclasses import dataclass, replace

DRAFT_FIELDS: tuple[str, ...] = ("start", "end", "text")


@dataclass(frozen=True)
class Caption:
    start: float
    end: float
    text: str

    def with_start(self, start: float) -> Caption:
        return replace(self, start=start)

    def with_end(self, end: float) -> Caption:
        return replace(self, end=end)

    def with_text(self, text: str) -> Caption:
        return replace(self, text=text)

    def to_draft(self) -> CaptionDraft:
        return CaptionDraft(start=self.start, end=self.end, text=self.text)


@dataclass(frozen=True)
class CaptionDraft:
    """Caption values as entered by a user, before validation."""

    start: str | float = ""
    end: str | float = ""
    text: str = ""

    def with_field(self, field: str, value: str | float) -> CaptionDraft:
        if field not in DRAFT_FIELDS:
            raise ValueError(
                f"Unknown caption field '{field}'. Allowed: {', '.join(DRAFT_FIELDS)}"
            )
        return replace(self, **{field: value})
