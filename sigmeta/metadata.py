"""Metadata — decoding and encoding of SigMF metadata documents.

Usage:
    from sigmeta import Metadata

    meta = Metadata.from_str(text, data_length=len(data))

    print(meta.global_.datatype)           # "cf32_le"
    print(meta.captures[0].byte_range)     # ByteRange(start=0, end=4096)
    print(meta.global_.other)              # {"antenna:model": "ARA CSB-16", ...}

    text = meta.to_str()                   # Pretty-printed, stable layout
"""

from __future__ import annotations

import json
import logging

from pydantic import Field, ValidationError

from sigmeta.boundaries import compute_boundaries
from sigmeta.errors import MalformedError
from sigmeta.storage.format import ANNOTATIONS_KEY, CAPTURES_KEY, GLOBAL_KEY, JSON_INDENT
from sigmeta.utils.schema import (
    WIRE_CONTEXT,
    AnnotationMetadata,
    CaptureMetadata,
    GlobalMetadata,
    WireModel,
)

logger = logging.getLogger(__name__)


class Metadata(WireModel):
    """A whole metadata document: global object, captures and annotations."""

    global_: GlobalMetadata = Field(alias=GLOBAL_KEY)
    captures: list[CaptureMetadata] = Field(default_factory=list, alias=CAPTURES_KEY)
    annotations: list[AnnotationMetadata] = Field(default_factory=list, alias=ANNOTATIONS_KEY)

    @classmethod
    def from_str(cls, text: str | bytes, data_length: int | None = None) -> Metadata:
        return decode(text, data_length)

    def to_str(self) -> str:
        return encode(self)


def decode(text: str | bytes, data_length: int | None = None) -> Metadata:
    """Parse a metadata document.

    When ``data_length`` is given, every capture is assigned its byte range
    within a dataset of that many bytes. Without it, captures keep
    ``byte_range`` and ``sample_format`` unset.

    Args:
        text: The JSON document.
        data_length: Size of the companion dataset in bytes.

    Returns:
        The decoded Metadata.

    Raises:
        MalformedError: If the text is not JSON or a required field is
            missing or has the wrong type.
        InternalError: If capture boundaries are inconsistent with the data.
    """
    try:
        document = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise MalformedError(f"invalid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise MalformedError(f"expected a JSON object, got {type(document).__name__}")

    try:
        metadata = Metadata.model_validate(document, context={WIRE_CONTEXT: True})
    except ValidationError as exc:
        raise MalformedError(str(exc)) from exc

    logger.debug(
        "Decoded metadata: datatype=%s, %d captures, %d annotations, %d extension fields",
        metadata.global_.datatype,
        len(metadata.captures),
        len(metadata.annotations),
        len(metadata.global_.other),
    )

    if data_length is not None:
        compute_boundaries(
            metadata.captures,
            metadata.global_.datatype,
            metadata.global_.trailing_bytes,
            data_length,
        )
    return metadata


def encode(metadata: Metadata) -> str:
    """Serialize to a pretty-printed document.

    Core fields come first in declaration order, unset fields are omitted,
    and open global fields follow sorted by key. Derived capture layout is
    never written.
    """
    document = metadata.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(document, indent=JSON_INDENT, ensure_ascii=False)


def _reject_constant(name: str) -> None:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"non-standard constant {name}")
