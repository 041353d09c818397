"""SigMF recording layout constants.

A recording is a pair of sibling files sharing a base name:

    <name>.sigmf-meta   — JSON document with global, captures, annotations
    <name>.sigmf-data   — raw interleaved samples, described by core:datatype

Every field in the metadata document is namespaced. Core fields use the
"core" prefix; extensions use their own prefix. Namespaces are a naming
convention only: all fields of an object are siblings.
"""

# File extensions
METADATA_EXTENSION = ".sigmf-meta"
DATASET_EXTENSION = ".sigmf-data"

# Top-level document keys
GLOBAL_KEY = "global"
CAPTURES_KEY = "captures"
ANNOTATIONS_KEY = "annotations"

# Namespace handling
CORE_NAMESPACE = "core"
NAMESPACE_SEPARATOR = ":"

# SigMF format version written by new recordings
FORMAT_VERSION = "1.0.0"

# Pretty-print indentation for encoded documents
JSON_INDENT = 2


def core_key(field: str) -> str:
    """Wire name of a core field, e.g. "datatype" -> "core:datatype"."""
    return f"{CORE_NAMESPACE}{NAMESPACE_SEPARATOR}{field}"


def namespace_prefix(namespace: str) -> str:
    """Key prefix shared by every field of a namespace."""
    return f"{namespace}{NAMESPACE_SEPARATOR}"
