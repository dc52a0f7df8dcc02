"""Shared constants, build configuration and errors for the pool seed generator."""

from __future__ import annotations

from dataclasses import dataclass, field
import struct

WORD_BITS = 32
WORD_BYTES = 4
WORD_MASK = (1 << WORD_BITS) - 1
# Raw entropy is decoded little-endian, both in bulk and for single words.
WORD_STRUCT = struct.Struct("<I")
WORD_DTYPE = "<u4"

DEFAULT_ENTROPY_DEVICE = "/dev/urandom"
PROGRAM_NAME = "gen_random_init"


@dataclass(frozen=True)
class PoolGeometry:
    """Pool sizes compiled into the consuming driver.

    The emitted ``#define`` values must match the driver's own definitions.
    """

    input_pool_shift: int = 12
    output_pool_shift: int = 10

    @property
    def input_pool_words(self) -> int:
        return 1 << (self.input_pool_shift - 5)

    @property
    def output_pool_words(self) -> int:
        return 1 << (self.output_pool_shift - 5)

    @property
    def total_pool_words(self) -> int:
        return self.input_pool_words + 2 * self.output_pool_words


@dataclass(frozen=True)
class HashConstantsLayout:
    """Layout of the constants block used by the GCM-style hash mode.

    Four pools get two 128-bit constants each: one initialises the hash
    accumulator, the other plays the role of the multiplier ``H``. A trailing
    region holds a 128-bit counter plus extra words for mixing.
    """

    array_rows: int = 8
    counter_words: int = 8

    @property
    def array_words(self) -> int:
        return 4 * self.array_rows

    @property
    def block_words(self) -> int:
        return self.array_words + self.counter_words


@dataclass(frozen=True)
class HeaderConfig:
    """Everything that shapes one generated header."""

    geometry: PoolGeometry = field(default_factory=PoolGeometry)
    hash_layout: HashConstantsLayout = field(default_factory=HashConstantsLayout)
    include_hash_constants: bool = False


DEFAULT_CONFIG = HeaderConfig()
GCM_CONFIG = HeaderConfig(include_hash_constants=True)


class PoolSeedError(RuntimeError):
    """Base class for fatal generator errors."""


class EntropyUnavailable(PoolSeedError):
    """Raised when the entropy source cannot be opened."""


class ShortRead(PoolSeedError):
    """Raised when the entropy source returns fewer bytes than requested."""

    def __init__(self, requested: int, received: int) -> None:
        super().__init__(
            f"read() failed, wanted {requested} bytes but got {received}"
        )
        self.requested = requested
        self.received = received


class AllocationFailure(PoolSeedError):
    """Raised when the buffer for a block cannot be allocated."""


class UsageError(PoolSeedError):
    """Raised when the generator is invoked with unexpected arguments."""
