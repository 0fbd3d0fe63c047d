"""Value Objects describing a product listing request.

Value Objects are immutable and compared by value. The strict
constructors reject invalid values; the ``of``/``from_params`` factories
accept raw request input and fall back to defaults instead of failing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Sequence, TypeVar

from catalog.domain.exceptions import ValidationError

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 25

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

T = TypeVar("T")


def parse_leading_int(raw: Any) -> int | None:
    """Lenient integer parsing: ``"10abc"`` -> 10, ``"3.5"`` -> 3, ``"x"`` -> None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw == raw and abs(raw) != float("inf") else None
    if isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        return int(match.group(1)) if match else None
    return None


@dataclass(frozen=True)
class Page:
    """An offset/limit window over an ordered sequence."""

    offset: int = DEFAULT_OFFSET
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        for name in ("offset", "limit"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValidationError(
                    f"Page {name} must be an integer, got {type(value).__name__}"
                )
        if self.offset < 0:
            raise ValidationError(f"Page offset cannot be negative, got {self.offset}")
        if self.limit <= 0:
            raise ValidationError(f"Page limit must be positive, got {self.limit}")

    def window(self, items: Sequence[T]) -> list[T]:
        return list(items[self.offset:self.offset + self.limit])

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(offset: Any = None, limit: Any = None) -> Page:
        """Coerce raw values, substituting the default for anything unusable.

        Missing, non-numeric, zero and negative values never raise.
        """
        parsed_offset = parse_leading_int(offset)
        parsed_limit = parse_leading_int(limit)
        return Page(
            offset=parsed_offset if parsed_offset and parsed_offset > 0 else DEFAULT_OFFSET,
            limit=parsed_limit if parsed_limit and parsed_limit > 0 else DEFAULT_LIMIT,
        )


@dataclass(frozen=True)
class ProductQuery:
    """Tag filter plus pagination for a product listing."""

    tag: str | None = None
    page: Page = field(default_factory=Page)

    @staticmethod
    def from_params(tag: Any = None, offset: Any = None, limit: Any = None) -> ProductQuery:
        return ProductQuery(
            tag=tag if isinstance(tag, str) and tag else None,
            page=Page.of(offset, limit),
        )
