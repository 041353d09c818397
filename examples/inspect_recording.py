"""sigmeta Example: write, inspect and annotate a SigMF recording

Writes a two-capture cf32_le recording, reopens it, prints the byte range of
each capture, tags the recording with antenna metadata and saves it back.

Run:
    python examples/inspect_recording.py

Output:
    - Creates example.sigmf-data and example.sigmf-meta
"""

import json

import numpy as np

from sigmeta import AntennaGlobal
from sigmeta.storage.format import FORMAT_VERSION
from sigmeta.storage.reader import SigMF


def write_recording(base: str, sample_rate: float = 1e6) -> None:
    """Write 2000 complex samples split into two captures at different frequencies."""
    rng = np.random.default_rng(0)
    samples = (rng.standard_normal(2000) + 1j * rng.standard_normal(2000)).astype("<c8")
    samples.tofile(f"{base}.sigmf-data")

    document = {
        "global": {
            "core:datatype": "cf32_le",
            "core:version": FORMAT_VERSION,
            "core:sample_rate": sample_rate,
            "core:description": "Two-segment example",
        },
        "captures": [
            {"core:sample_start": 0, "core:frequency": 915e6},
            {"core:sample_start": 1200, "core:frequency": 2.4e9},
        ],
        "annotations": [
            {"core:sample_start": 100, "core:sample_count": 50, "core:label": "burst"},
        ],
    }
    with open(f"{base}.sigmf-meta", "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)


if __name__ == "__main__":
    write_recording("example")

    rec = SigMF.from_file("example.sigmf-meta")
    print(rec)

    for i, capture in enumerate(rec.metadata.captures):
        samples = rec.read_capture(i)
        print(
            f"capture {i}: {capture.frequency / 1e6:.0f} MHz, "
            f"bytes {capture.byte_range.start}-{capture.byte_range.end}, "
            f"{len(samples)} samples, mean power {np.mean(np.abs(samples) ** 2):.3f}"
        )

    rec.metadata.global_.set_extension(AntennaGlobal(model="ARA CSB-16", antenna_type="dipole"))
    path = rec.save("example")
    print(f"Saved: {path}")
    print(path.read_text(encoding="utf-8"))
