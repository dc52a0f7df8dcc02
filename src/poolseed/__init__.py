"""Filtered random constants for seeding kernel entropy pools at build time."""

from .common import (
    DEFAULT_CONFIG,
    GCM_CONFIG,
    AllocationFailure,
    EntropyUnavailable,
    HashConstantsLayout,
    HeaderConfig,
    PoolGeometry,
    PoolSeedError,
    ShortRead,
    UsageError,
)
from .emit import build_header, format_block, generate_blocks, render_header
from .entropy import DeviceEntropySource, EntropySource, ReplayEntropySource, read_random
from .filtering import Block, accept, generate_block, hamming_weight, word_bytes

__all__ = [
    "DEFAULT_CONFIG",
    "GCM_CONFIG",
    "AllocationFailure",
    "Block",
    "DeviceEntropySource",
    "EntropySource",
    "EntropyUnavailable",
    "HashConstantsLayout",
    "HeaderConfig",
    "PoolGeometry",
    "PoolSeedError",
    "ReplayEntropySource",
    "ShortRead",
    "UsageError",
    "accept",
    "build_header",
    "format_block",
    "generate_block",
    "generate_blocks",
    "hamming_weight",
    "read_random",
    "render_header",
    "word_bytes",
]
