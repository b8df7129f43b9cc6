"""Archive encoding for ordered maps.

An archived map is two positionally aligned sequences stored under two
canonical keys::

    {"keys": [k0, k1, ...], "objects": [v0, v1, ...]}

The key at position i belongs to the object at position i. Decoding goes
through the parallel-sequence constructor and never sorts or deduplicates:
an archive with repeated keys is rejected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Final

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from ordmap.errors import ArchiveFormatError, ArityMismatchError, DuplicateKeyError
from ordmap.ordered_map import MutableOrderedMap, OrderedMap

logger = structlog.get_logger()

ARCHIVE_KEY_KEYS: Final = "keys"
ARCHIVE_KEY_OBJECTS: Final = "objects"


class ArchivePayload(BaseModel):
    """Validated shape of an archived ordered map."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    keys: list[Any]
    objects: list[Any]

    @model_validator(mode="after")
    def check_alignment(self) -> ArchivePayload:
        """Keys and objects must line up one to one."""
        if len(self.keys) != len(self.objects):
            raise ArityMismatchError(len(self.keys), len(self.objects))
        return self


def encode_archive(ordered: OrderedMap[Any, Any]) -> dict[str, list[Any]]:
    """Encode a map as its ``keys``/``objects`` archive dict."""
    return {
        ARCHIVE_KEY_KEYS: ordered.all_keys(),
        ARCHIVE_KEY_OBJECTS: ordered.all_values(),
    }


def decode_archive(data: Any, *, mutable: bool = False) -> OrderedMap[Any, Any]:
    """Rebuild a map from an archive dict, preserving order exactly.

    Args:
        data: Archive payload (a mapping with ``keys`` and ``objects``).
        mutable: Return a `MutableOrderedMap` instead of an `OrderedMap`.

    Raises:
        ArchiveFormatError: If the payload is not a valid archive.
    """
    try:
        payload = ArchivePayload.model_validate(data)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'archive'}: {error['msg']}"
            for error in exc.errors()
        )
        msg = f"invalid ordered map archive: {details}"
        raise ArchiveFormatError(msg) from exc

    cls: type[OrderedMap[Any, Any]] = MutableOrderedMap if mutable else OrderedMap
    try:
        result = cls.from_pairs(payload.keys, payload.objects, duplicates="raise")
    except DuplicateKeyError as exc:
        msg = f"archive repeats key {exc.key!r}"
        raise ArchiveFormatError(msg) from exc
    except TypeError as exc:
        msg = f"archive contains an unhashable key: {exc}"
        raise ArchiveFormatError(msg) from exc

    logger.debug("archive_decoded", count=len(result), mutable=mutable)
    return result


def dumps(ordered: OrderedMap[Any, Any]) -> str:
    """Serialize a map's archive as compact JSON."""
    return json.dumps(
        encode_archive(ordered),
        separators=(",", ":"),
        ensure_ascii=False,
    )


def loads(text: str | bytes, *, mutable: bool = False) -> OrderedMap[Any, Any]:
    """Parse JSON produced by `dumps` back into a map.

    Raises:
        ArchiveFormatError: If the text is not JSON or not a valid archive.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"archive is not valid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})"
        raise ArchiveFormatError(msg) from exc
    return decode_archive(data, mutable=mutable)


def read_archive(path: Path, *, mutable: bool = False) -> OrderedMap[Any, Any]:
    """Load a map from a JSON archive file."""
    return loads(path.read_text(encoding="utf-8"), mutable=mutable)


def write_archive(ordered: OrderedMap[Any, Any], path: Path) -> None:
    """Write a map to a JSON archive file."""
    path.write_text(dumps(ordered) + "\n", encoding="utf-8")
