"""Pydantic models for the objects of a SigMF metadata document."""

from __future__ import annotations

from typing import Annotated, Any, NamedTuple, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    PrivateAttr,
    SerializerFunctionWrapHandler,
    Strict,
    StrictBool,
    StrictFloat,
    StrictStr,
    ValidationInfo,
    field_validator,
    model_serializer,
    model_validator,
)

from sigmeta.datatype import SampleFormat
from sigmeta.storage.format import core_key

# Validation context flag: input comes from a document, so only wire names count.
WIRE_CONTEXT = "wire"

# Documents must carry the JSON type itself: no "5" for 5, no true for 1.
Count = Annotated[NonNegativeInt, Strict()]


class ByteRange(NamedTuple):
    """Half-open byte interval [start, end) in the dataset file."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


class WireModel(BaseModel):
    """Base for SigMF objects whose fields carry namespaced wire names.

    Models can be built in Python by field name (``datatype=...``) or from a
    document by wire name (``"core:datatype"``). When validating a document,
    a key that is not a wire name is unknown even if it matches a field name.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", allow_inf_nan=False)

    @classmethod
    def wire_names(cls) -> dict[str, str]:
        """Map wire name -> field name."""
        return {(f.alias or name): name for name, f in cls.model_fields.items() if not f.exclude}

    @model_validator(mode="before")
    @classmethod
    def _split_unknown_fields(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict):
            return data
        from_wire = bool(info.context and info.context.get(WIRE_CONTEXT))
        accepted = set(cls.wire_names())
        if not from_wire:
            accepted.update(cls.model_fields)
        known = {k: v for k, v in data.items() if k in accepted}
        unknown = {k: v for k, v in data.items() if k not in accepted}
        return cls.absorb_unknown(known, unknown)

    @classmethod
    def absorb_unknown(cls, known: dict[str, Any], unknown: dict[str, Any]) -> dict[str, Any]:
        """Decide what happens to unknown keys. Dropped by default."""
        return known


class GlobalMetadata(WireModel):
    """The global object: dataset-wide properties.

    Keys outside the core fields (extension namespaces and anything else)
    are kept in ``other`` and written back after the core fields, sorted by
    key.
    """

    datatype: StrictStr = Field(alias=core_key("datatype"))
    sample_rate: Optional[StrictFloat] = Field(default=None, alias=core_key("sample_rate"))
    version: StrictStr = Field(alias=core_key("version"))
    num_channels: Optional[Count] = Field(default=None, alias=core_key("num_channels"))
    sha512: Optional[StrictStr] = Field(default=None, alias=core_key("sha512"))
    offset: Optional[Count] = Field(default=None, alias=core_key("offset"))
    description: Optional[StrictStr] = Field(default=None, alias=core_key("description"))
    author: Optional[StrictStr] = Field(default=None, alias=core_key("author"))
    meta_doi: Optional[StrictStr] = Field(default=None, alias=core_key("meta_doi"))
    data_doi: Optional[StrictStr] = Field(default=None, alias=core_key("data_doi"))
    recorder: Optional[StrictStr] = Field(default=None, alias=core_key("recorder"))
    license: Optional[StrictStr] = Field(default=None, alias=core_key("license"))
    hw: Optional[StrictStr] = Field(default=None, alias=core_key("hw"))
    geolocation: Optional[StrictStr] = Field(default=None, alias=core_key("geolocation"))
    collection: Optional[StrictStr] = Field(default=None, alias=core_key("collection"))
    metadata_only: Optional[StrictBool] = Field(default=None, alias=core_key("metadata_only"))
    dataset: Optional[StrictStr] = Field(default=None, alias=core_key("dataset"))
    trailing_bytes: Optional[Count] = Field(default=None, alias=core_key("trailing_bytes"))

    other: dict[str, Any] = Field(default_factory=dict, exclude=True)

    @classmethod
    def absorb_unknown(cls, known: dict[str, Any], unknown: dict[str, Any]) -> dict[str, Any]:
        if unknown:
            known["other"] = {**(known.get("other") or {}), **unknown}
        return known

    @field_validator("other")
    @classmethod
    def _sort_other(cls, v: dict[str, Any]) -> dict[str, Any]:
        return dict(sorted(v.items()))

    @model_serializer(mode="wrap")
    def _append_other(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        data.update(sorted(self.other.items()))
        return data

    # --- Extensions ---

    def get_extension(self, ext_type: type[Any]) -> Any:
        """Read an extension from the open fields. See sigmeta.extensions."""
        from sigmeta.extensions import get_extension

        return get_extension(self, ext_type)

    def set_extension(self, value: Any) -> None:
        """Replace an extension's fields. See sigmeta.extensions."""
        from sigmeta.extensions import set_extension

        set_extension(self, value)

    def delete_extension(self, ext_type: type[Any]) -> None:
        """Remove an extension's fields. See sigmeta.extensions."""
        from sigmeta.extensions import delete_extension

        delete_extension(self, ext_type)


class CaptureMetadata(WireModel):
    """One capture segment.

    ``byte_range`` and ``sample_format`` are derived when the document is
    decoded with a data length. They are never serialized and are not
    recomputed when fields change afterwards.
    """

    sample_start: Count = Field(alias=core_key("sample_start"))
    global_index: Optional[Count] = Field(default=None, alias=core_key("global_index"))
    frequency: Optional[StrictFloat] = Field(default=None, alias=core_key("frequency"))
    datetime: Optional[StrictStr] = Field(default=None, alias=core_key("datetime"))
    header_bytes: Optional[Count] = Field(default=None, alias=core_key("header_bytes"))

    _byte_range: Optional[ByteRange] = PrivateAttr(default=None)
    _sample_format: Optional[SampleFormat] = PrivateAttr(default=None)

    @property
    def byte_range(self) -> ByteRange | None:
        return self._byte_range

    @property
    def sample_format(self) -> SampleFormat | None:
        return self._sample_format

    def bind_layout(self, sample_format: SampleFormat, byte_range: ByteRange) -> None:
        """Attach the derived layout computed for this capture."""
        self._sample_format = sample_format
        self._byte_range = byte_range


class AnnotationMetadata(WireModel):
    """A labeled region of the sample stream."""

    sample_start: Count = Field(alias=core_key("sample_start"))
    sample_count: Optional[Count] = Field(default=None, alias=core_key("sample_count"))
    freq_lower_edge: Optional[StrictFloat] = Field(default=None, alias=core_key("freq_lower_edge"))
    freq_upper_edge: Optional[StrictFloat] = Field(default=None, alias=core_key("freq_upper_edge"))
    label: Optional[StrictStr] = Field(default=None, alias=core_key("label"))
    generator: Optional[StrictStr] = Field(default=None, alias=core_key("generator"))
    comment: Optional[StrictStr] = Field(default=None, alias=core_key("comment"))
    uuid: Optional[StrictStr] = Field(default=None, alias=core_key("uuid"))
