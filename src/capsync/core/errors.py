from __future__ import annotations

NOT_NUMERIC = "NotNumeric"
NEGATIVE = "Negative"
END_BEFORE_START = "EndBeforeStart"
EMPTY_TEXT = "EmptyText"
OUT_OF_DURATION = "OutOfDuration"
OVERLAP = "Overlap"
INDEX_OUT_OF_RANGE = "IndexOutOfRange"

VALIDATION_ERROR_KINDS: tuple[str, ...] = (
    NOT_NUMERIC,
    NEGATIVE,
    END_BEFORE_START,
    EMPTY_TEXT,
    OUT_OF_DURATION,
    OVERLAP,
)
ERROR_KINDS: tuple[str, ...] = (*VALIDATION_ERROR_KINDS, INDEX_OUT_OF_RANGE)


class CaptionError(ValueError):
    """User-correctable caption error carrying a stable ``kind``."""

    def __init__(self, kind: str, message: str) -> None:
        if kind not in ERROR_KINDS:
            raise ValueError(f"Unknown caption error kind '{kind}'.")
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind!r}, message={self.message!r})"


class CaptionValidationError(CaptionError):
    pass


class CaptionIndexError(CaptionError, IndexError):
    def __init__(self, index: int, size: int) -> None:
        super().__init__(
            INDEX_OUT_OF_RANGE,
            f"No caption at position {index} (store holds {size}).",
        )
        self.index = index
        self.size = size
