"""Namespaced extensions of the global object.

An extension is any pydantic model with a ``namespace`` class variable whose
fields are aliased to ``"<namespace>:<field>"`` wire names:

    class AntennaGlobal(BaseModel):
        namespace: ClassVar[str] = "antenna"

        model: str = Field(alias="antenna:model")

Extensions live in the open fields of GlobalMetadata (``record.other``) and
are read, replaced and removed through the functions below.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_core import PydanticSerializationError

from sigmeta.errors import DecodeError
from sigmeta.storage.format import NAMESPACE_SEPARATOR, namespace_prefix

if TYPE_CHECKING:
    from sigmeta.utils.schema import GlobalMetadata

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseModel)


class AntennaGlobal(BaseModel):
    """Global fields of the "antenna" extension."""

    model_config = ConfigDict(populate_by_name=True)

    namespace: ClassVar[str] = "antenna"

    model: str = Field(alias="antenna:model")
    antenna_type: Optional[str] = Field(default=None, alias="antenna:type")


def extension_namespace(ext_type: type[Any]) -> str:
    """Namespace declared by an extension type."""
    namespace = getattr(ext_type, "namespace", None)
    if not isinstance(namespace, str) or not namespace:
        raise TypeError(f"{ext_type.__name__} does not declare a namespace")
    return namespace


def get_extension(record: GlobalMetadata, ext_type: type[E]) -> E:
    """Build ``ext_type`` from the record's open fields.

    All namespaced open fields are offered, whatever their namespace, so only
    keys matching the type's wire names populate it.

    Raises:
        DecodeError: If required fields are missing or have the wrong shape.
    """
    namespace = extension_namespace(ext_type)
    offered = {k: v for k, v in record.other.items() if NAMESPACE_SEPARATOR in k}
    try:
        return ext_type.model_validate(offered)
    except ValidationError as exc:
        raise DecodeError(f"cannot read '{namespace}' extension: {exc}") from exc


def set_extension(record: GlobalMetadata, value: BaseModel) -> None:
    """Replace every field of ``value``'s namespace with the fields of ``value``.

    Open fields of other namespaces are left untouched.

    Raises:
        DecodeError: If ``value`` does not serialize to an object of
            fields under its own namespace.
    """
    namespace = extension_namespace(type(value))
    prefix = namespace_prefix(namespace)
    try:
        encoded = value.model_dump(mode="json", by_alias=True, exclude_none=True)
    except PydanticSerializationError as exc:
        raise DecodeError(f"cannot serialize '{namespace}' extension: {exc}") from exc

    if not isinstance(encoded, dict):
        raise DecodeError(
            f"'{namespace}' extension must serialize to an object, got {type(encoded).__name__}"
        )
    stray = [k for k in encoded if not k.startswith(prefix)]
    if stray:
        raise DecodeError(f"'{namespace}' extension has fields outside its namespace: {stray}")

    fields = {k: v for k, v in record.other.items() if not k.startswith(prefix)}
    fields.update(encoded)
    _replace_other(record, fields)
    logger.debug("Set extension %r (%d fields)", namespace, len(encoded))


def delete_extension(record: GlobalMetadata, ext_type: type[Any]) -> None:
    """Remove every open field of ``ext_type``'s namespace. No-op if none."""
    namespace = extension_namespace(ext_type)
    prefix = namespace_prefix(namespace)
    fields = {k: v for k, v in record.other.items() if not k.startswith(prefix)}
    removed = len(record.other) - len(fields)
    _replace_other(record, fields)
    logger.debug("Deleted extension %r (%d fields)", namespace, removed)


def _replace_other(record: GlobalMetadata, fields: dict[str, Any]) -> None:
    # In place, sorted by key
    record.other.clear()
    record.other.update(sorted(fields.items()))
