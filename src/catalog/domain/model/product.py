"""Product record.

A product is an open-ended JSON object. Only the identifier and the two
timestamps are owned by the catalog; every other field is supplied by
the caller and passed through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

from catalog.domain.exceptions import ValidationError

# Fields the catalog assigns itself. Callers cannot set them.
RESERVED_FIELDS = ("id", "created_at", "updated_at")

_TICK = timedelta(milliseconds=1)


def format_timestamp(moment: datetime) -> str:
    """Render a datetime as UTC ISO-8601 with milliseconds, e.g.
    ``2024-05-01T12:00:00.000Z``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(text: str | None) -> datetime | None:
    """Inverse of format_timestamp; ``None`` for anything unparseable."""
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _caller_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_FIELDS}


def _optional_timestamp(raw: dict[str, Any], name: str) -> str | None:
    value = raw.get(name)
    if value is not None and not isinstance(value, str):
        raise ValidationError(
            f"Product {name} must be a string, got {type(value).__name__}"
        )
    return value


@dataclass
class Product:
    """A product in the catalog.

    ``attributes`` holds every caller-supplied field (name, price, tags,
    ...) in insertion order. Timestamps may be ``None`` for records that
    were written to the document by something other than this service.
    ``field_order`` remembers the key order of a record read from disk so
    that writing it back does not reshuffle it.
    """

    id: str
    created_at: str | None = None
    updated_at: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    field_order: tuple[str, ...] = field(default=(), compare=False, repr=False)

    @property
    def tags(self) -> list[Any]:
        tags = self.attributes.get("tags")
        return tags if isinstance(tags, list) else []

    # --- Construction ---------------------------------------------------------

    @classmethod
    def create(cls, product_id: str, fields: Mapping[str, Any], now: datetime) -> Product:
        """Build a new record. Caller-supplied id and timestamps are dropped."""
        stamp = format_timestamp(now)
        return cls(
            id=product_id,
            created_at=stamp,
            updated_at=stamp,
            attributes=_caller_fields(fields),
        )

    def merged_with(self, fields: Mapping[str, Any], now: datetime) -> Product:
        """Return a copy with ``fields`` shallow-merged over the attributes.

        Fields not mentioned are preserved. ``id`` and ``created_at`` never
        change. ``updated_at`` is refreshed and always moves forward, even
        when ``now`` falls in the same millisecond as the previous stamp.
        """
        attributes = dict(self.attributes)
        attributes.update(_caller_fields(fields))
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        previous = parse_timestamp(self.updated_at)
        if previous is not None and now <= previous:
            now = previous + _TICK
        return replace(self, attributes=attributes, updated_at=format_timestamp(now))

    # --- Serialization --------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        values: dict[str, Any] = {"id": self.id}
        values.update(self.attributes)
        if self.created_at is not None:
            values["created_at"] = self.created_at
        if self.updated_at is not None:
            values["updated_at"] = self.updated_at
        if not self.field_order:
            return values

        # Known keys keep their stored position, new keys go last.
        raw = {k: values[k] for k in self.field_order if k in values}
        raw.update((k, v) for k, v in values.items() if k not in raw)
        return raw

    @classmethod
    def from_dict(cls, raw: Any) -> Product:
        if not isinstance(raw, dict):
            raise ValidationError(
                f"Product record must be an object, got {type(raw).__name__}"
            )
        product_id = raw.get("id")
        if not isinstance(product_id, str):
            raise ValidationError(f"Product record has no string id: {product_id!r}")
        return cls(
            id=product_id,
            created_at=_optional_timestamp(raw, "created_at"),
            updated_at=_optional_timestamp(raw, "updated_at"),
            attributes=_caller_fields(raw),
            field_order=tuple(raw),
        )
