"""Byte ranges of capture segments within the dataset file.

Offsets accumulate across the capture list: each capture adds its header
bytes plus ``sample_start`` samples to a running offset, and that offset is
where the capture begins. A capture ends where the next one's samples begin
(the next capture's header bytes are not counted), and the last capture ends
``trailing_bytes`` before the end of the data.
"""

from __future__ import annotations

import logging
from typing import Sequence

from sigmeta.datatype import parse_datatype
from sigmeta.errors import InternalError, ParseError
from sigmeta.utils.schema import ByteRange, CaptureMetadata

logger = logging.getLogger(__name__)


def compute_boundaries(
    captures: Sequence[CaptureMetadata],
    datatype: str,
    trailing_bytes: int | None,
    data_length: int,
) -> list[ByteRange]:
    """Assign each capture its byte range and sample format.

    Ranges are computed for the whole list before any capture is updated, so
    a failure leaves every capture as it was.

    Args:
        captures: Capture segments in document order.
        datatype: The global core:datatype token, shared by all captures.
        trailing_bytes: Bytes at the end of the data not owned by any capture.
        data_length: Size of the dataset in bytes.

    Returns:
        The computed ranges, in capture order.

    Raises:
        InternalError: If the datatype cannot be parsed, the trailing bytes
            exceed the data length, or a capture would end before it starts.
    """
    if not captures:
        return []

    try:
        sample_format = parse_datatype(datatype)
    except ParseError as exc:
        raise InternalError(f"cannot resolve sample format: {exc}") from exc

    sample_size = sample_format.byte_size
    trailing = trailing_bytes or 0
    last = len(captures) - 1

    ranges: list[ByteRange] = []
    offset = 0
    for index, capture in enumerate(captures):
        offset += (capture.header_bytes or 0) + sample_size * capture.sample_start
        start = offset

        if index == last:
            if trailing > data_length:
                raise InternalError(
                    f"trailing bytes ({trailing}) exceed data length ({data_length})"
                )
            end = data_length - trailing
        else:
            end = offset + sample_size * captures[index + 1].sample_start

        if start > end:
            raise InternalError(
                f"capture {index} starts at byte {start} after its end at byte {end}"
            )
        ranges.append(ByteRange(start, end))

    for index, (capture, byte_range) in enumerate(zip(captures, ranges)):
        capture.bind_layout(sample_format, byte_range)
        logger.debug("Capture %d: bytes [%d, %d) as %s", index, *byte_range, sample_format)

    return ranges
