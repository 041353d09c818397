"""Sample-format tokens, e.g. "cf32_le" or "ru8".

Grammar:

    format       := number_type element_spec
    number_type  := "r" | "c"
    element_spec := sized_type endian | byte_type
    sized_type   := "f32" | "f64" | "i32" | "i16" | "u32" | "u16"
    endian       := "_le" | "_be"
    byte_type    := "i8" | "u8"

The parser is assembled from small pure combinators. Each parser takes the
remaining input and returns ``(value, rest)`` or raises ParseError.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, TypeVar

import numpy as np

from sigmeta.errors import ParseError

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")

Parser = Callable[[str], tuple[T, str]]


class NumberType(Enum):
    REAL = "r"
    COMPLEX = "c"

    @property
    def components(self) -> int:
        """Values stored per sample (complex samples interleave I and Q)."""
        return 2 if self is NumberType.COMPLEX else 1


class Endianness(Enum):
    LITTLE = "_le"
    BIG = "_be"

    @property
    def numpy_order(self) -> str:
        return "<" if self is Endianness.LITTLE else ">"


class ElementKind(Enum):
    """Storage type of one component. Value is (token, byte size, numpy kind)."""

    F32 = ("f32", 4, "f")
    F64 = ("f64", 8, "f")
    I32 = ("i32", 4, "i")
    I16 = ("i16", 2, "i")
    U32 = ("u32", 4, "u")
    U16 = ("u16", 2, "u")
    I8 = ("i8", 1, "i")
    U8 = ("u8", 1, "u")

    @property
    def token(self) -> str:
        return self.value[0]

    @property
    def byte_size(self) -> int:
        return self.value[1]

    @property
    def has_endianness(self) -> bool:
        return self.byte_size > 1


SIZED_KINDS = tuple(k for k in ElementKind if k.has_endianness)
BYTE_KINDS = tuple(k for k in ElementKind if not k.has_endianness)


@dataclass(frozen=True)
class ElementType:
    """One sample component: a storage kind plus byte order for multi-byte kinds."""

    kind: ElementKind
    endianness: Endianness | None = None

    def __post_init__(self) -> None:
        if self.kind.has_endianness and self.endianness is None:
            raise ValueError(f"{self.kind.name} requires an endianness")
        if not self.kind.has_endianness and self.endianness is not None:
            raise ValueError(f"{self.kind.name} has no endianness")

    @property
    def byte_size(self) -> int:
        return self.kind.byte_size

    @property
    def token(self) -> str:
        suffix = self.endianness.value if self.endianness is not None else ""
        return f"{self.kind.token}{suffix}"

    @property
    def numpy_dtype(self) -> np.dtype:
        order = self.endianness.numpy_order if self.endianness is not None else "|"
        return np.dtype(f"{order}{self.kind.value[2]}{self.byte_size}")


@dataclass(frozen=True)
class SampleFormat:
    """Resolved form of a core:datatype token."""

    number_type: NumberType
    element_type: ElementType

    @property
    def byte_size(self) -> int:
        """Bytes per sample, counting both components of a complex sample."""
        return self.element_type.byte_size * self.number_type.components

    @property
    def is_complex(self) -> bool:
        return self.number_type is NumberType.COMPLEX

    @property
    def token(self) -> str:
        """Canonical datatype token, e.g. "cf32_le"."""
        return f"{self.number_type.value}{self.element_type.token}"

    @property
    def numpy_dtype(self) -> np.dtype:
        """numpy dtype of one sample.

        Complex floats map to numpy's complex types. Complex integers have no
        numpy equivalent and map to a structured ("real", "imag") dtype.
        """
        element = self.element_type.numpy_dtype
        if not self.is_complex:
            return element
        if self.element_type.kind.value[2] == "f":
            order = self.element_type.endianness.numpy_order
            return np.dtype(f"{order}c{self.byte_size}")
        return np.dtype([("real", element), ("imag", element)])

    def __str__(self) -> str:
        return self.token


# --- Combinators ---


def tag(literal: str, value: T) -> Parser[T]:
    """Match ``literal`` at the start of the input and produce ``value``."""

    def parse_tag(text: str) -> tuple[T, str]:
        if text.startswith(literal):
            return value, text[len(literal):]
        raise ParseError(repr(literal), text)

    return parse_tag


def alt(*parsers: Parser[T]) -> Parser[T]:
    """Ordered choice: the first parser that succeeds wins.

    When all fail, the failure that got furthest into the input is reported.
    """

    def parse_alt(text: str) -> tuple[T, str]:
        failures: list[ParseError] = []
        for parser in parsers:
            try:
                return parser(text)
            except ParseError as exc:
                failures.append(exc)
        furthest = min(failures, key=lambda e: len(e.text))
        expected = sorted({str(e) for e in failures if len(e.text) == len(furthest.text)})
        raise ParseError(" or ".join(expected), furthest.text)

    return parse_alt


def seq(first: Parser[T], second: Parser[U], combine: Callable[[T, U], V]) -> Parser[V]:
    """Run ``first`` then ``second`` on the rest; merge both values."""

    def parse_seq(text: str) -> tuple[V, str]:
        a, rest = first(text)
        b, rest = second(rest)
        return combine(a, b), rest

    return parse_seq


def fmap(parser: Parser[T], func: Callable[[T], U]) -> Parser[U]:
    """Transform the value produced by ``parser``."""

    def parse_map(text: str) -> tuple[U, str]:
        value, rest = parser(text)
        return func(value), rest

    return parse_map


# --- Grammar ---

number_type = alt(*(tag(n.value, n) for n in NumberType))
endian = alt(*(tag(e.value, e) for e in Endianness))
sized_type = alt(*(tag(k.token, k) for k in SIZED_KINDS))
byte_type = fmap(alt(*(tag(k.token, k) for k in BYTE_KINDS)), ElementType)
element_spec = alt(seq(sized_type, endian, ElementType), byte_type)
sample_format = seq(number_type, element_spec, SampleFormat)


def parse(text: str) -> tuple[SampleFormat, str]:
    """Parse a sample format from the start of ``text``.

    This is a prefix parser: trailing input is returned, not rejected.

    Returns:
        (SampleFormat, remainder)

    Raises:
        ParseError: If no grammar alternative matches. ``position`` is the
            offset in ``text`` where matching failed.
    """
    try:
        return sample_format(text)
    except ParseError as exc:
        position = len(text) - len(exc.text)
        raise ParseError(
            f"invalid datatype {text!r} at position {position}: expected {exc}",
            text,
            position,
        ) from None


def parse_datatype(text: str) -> SampleFormat:
    """Parse a complete datatype token; trailing characters are an error."""
    fmt, rest = parse(text)
    if rest:
        position = len(text) - len(rest)
        raise ParseError(
            f"invalid datatype {text!r}: unexpected {rest!r} at position {position}",
            text,
            position,
        )
    return fmt


def all_formats() -> list[SampleFormat]:
    """Every sample format the grammar accepts."""
    elements = [ElementType(k, e) for k in SIZED_KINDS for e in Endianness]
    elements += [ElementType(k) for k in BYTE_KINDS]
    return [SampleFormat(n, el) for n in NumberType for el in elements]
