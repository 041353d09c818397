"""sigmeta — SigMF metadata core.

Parse, edit and re-serialize SigMF metadata documents, with namespaced
extension fields preserved and capture byte ranges computed against the
dataset size.

Quick start:
    from sigmeta import AntennaGlobal, Metadata, parse_datatype

    # Decode, with capture byte ranges for a 4096-byte dataset
    meta = Metadata.from_str(text, data_length=4096)
    print(meta.captures[0].byte_range)   # ByteRange(start=0, end=4096)

    # Extensions
    meta.global_.set_extension(AntennaGlobal(model="ARA CSB-16"))
    antenna = meta.global_.get_extension(AntennaGlobal)
    meta.global_.delete_extension(AntennaGlobal)

    # Encode
    text = meta.to_str()

    # Sample formats
    fmt = parse_datatype("cf32_le")
    print(fmt.byte_size)                 # 8

    # Files
    from sigmeta.storage.reader import SigMF
    rec = SigMF.from_file("recording.sigmf-meta")
    samples = rec.read_capture(0)
"""

__version__ = "0.1.0"

from sigmeta.datatype import SampleFormat, parse, parse_datatype
from sigmeta.errors import DecodeError, InternalError, MalformedError, ParseError, SigMFError
from sigmeta.extensions import AntennaGlobal, delete_extension, get_extension, set_extension
from sigmeta.metadata import Metadata, decode, encode
from sigmeta.utils.schema import AnnotationMetadata, ByteRange, CaptureMetadata, GlobalMetadata

__all__ = [
    "AnnotationMetadata",
    "AntennaGlobal",
    "ByteRange",
    "CaptureMetadata",
    "DecodeError",
    "GlobalMetadata",
    "InternalError",
    "MalformedError",
    "Metadata",
    "ParseError",
    "SampleFormat",
    "SigMFError",
    "decode",
    "delete_extension",
    "encode",
    "get_extension",
    "parse",
    "parse_datatype",
    "set_extension",
    "__version__",
]
