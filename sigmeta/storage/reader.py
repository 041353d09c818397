"""File access for SigMF recordings on disk.

Reads a .sigmf-meta file, sizes the sibling .sigmf-data file, and reads
capture samples by byte range.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from sigmeta.metadata import Metadata, decode, encode
from sigmeta.storage.format import DATASET_EXTENSION, METADATA_EXTENSION

logger = logging.getLogger(__name__)


def metadata_path(path: str | Path) -> Path:
    """Resolve the .sigmf-meta path for a recording base name, meta or data path."""
    path = Path(path)
    if path.suffix in (METADATA_EXTENSION, DATASET_EXTENSION):
        return path.with_suffix(METADATA_EXTENSION)
    return path.with_name(path.name + METADATA_EXTENSION)


class SigMF:
    """A recording: decoded metadata plus the location of its dataset.

    Args:
        metadata: Decoded metadata.
        data_path: Path to the .sigmf-data file, or None when there is none.
    """

    def __init__(self, metadata: Metadata, data_path: str | Path | None = None) -> None:
        self.metadata = metadata
        self.data_path = Path(data_path) if data_path is not None else None

    @classmethod
    def from_file(cls, path: str | Path) -> SigMF:
        """Open a recording from its .sigmf-meta file (or base name).

        When the sibling .sigmf-data file exists, its size is used to compute
        the byte range of every capture.

        Raises:
            FileNotFoundError: If the metadata file does not exist.
            MalformedError, InternalError: See sigmeta.metadata.decode.
        """
        meta_path = metadata_path(path)
        if not meta_path.exists():
            raise FileNotFoundError(f"Metadata not found: {meta_path}")

        data_path: Path | None = meta_path.with_suffix(DATASET_EXTENSION)
        if data_path.exists():
            data_length: int | None = data_path.stat().st_size
        else:
            logger.info("No dataset next to %s; capture byte ranges not computed", meta_path)
            data_path = None
            data_length = None

        metadata = decode(meta_path.read_text(encoding="utf-8"), data_length)
        return cls(metadata, data_path)

    def read_capture(self, index: int) -> np.ndarray:
        """Read the samples of one capture.

        Args:
            index: Capture index.

        Returns:
            numpy array of the capture's samples, typed by core:datatype.
        """
        if self.data_path is None:
            raise RuntimeError("Recording has no dataset file.")

        capture = self.metadata.captures[index]
        byte_range = capture.byte_range
        sample_format = capture.sample_format
        if byte_range is None or sample_format is None:
            raise RuntimeError(f"Capture {index} has no byte range.")

        count = byte_range.length // sample_format.byte_size
        return np.fromfile(
            self.data_path,
            dtype=sample_format.numpy_dtype,
            count=count,
            offset=byte_range.start,
        )

    def save(self, path: str | Path) -> Path:
        """Write the metadata document to ``path`` (a .sigmf-meta file or base name)."""
        meta_path = metadata_path(path)
        meta_path.parent.mkdir(parents=True, exist_ok=True)
        meta_path.write_text(encode(self.metadata), encoding="utf-8")
        return meta_path

    def __repr__(self) -> str:
        return (
            f"SigMF(datatype='{self.metadata.global_.datatype}', "
            f"captures={len(self.metadata.captures)}, "
            f"annotations={len(self.metadata.annotations)})"
        )
