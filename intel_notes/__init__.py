"""intel_notes package."""

__all__ = [
    "config",
    "classifier",
    "cost_model",
    "flatten",
    "bin_packer",
    "note_assembler",
    "submission",
]
