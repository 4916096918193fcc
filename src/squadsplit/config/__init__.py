"""Configuration helpers for assignment options and weight presets."""

from .options import AssignmentOptions, WeightPreset, get_preset, iter_presets

__all__ = [
    "AssignmentOptions",
    "WeightPreset",
    "get_preset",
    "iter_presets",
]
