"""Acceptance filtering for random seed words.

These tests are not strictly necessary: taking whatever the entropy source
produces would arguably be the most random choice, and any bias makes the
output slightly easier to guess. However, a Hamming weight near 16 gives a
chance close to 50/50 that using one of these numbers in arithmetic (addition,
xor or the various forms of multiplication) changes any given bit, which is
what pool mixing wants. The compromise is a mild bias: bounded weight, and
every byte holding at least one 1 bit and at least one 0 bit.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import numbers
from typing import Tuple

import numpy as _np

from .common import (
    WORD_BITS,
    WORD_BYTES,
    WORD_DTYPE,
    WORD_MASK,
    WORD_STRUCT,
    AllocationFailure,
)
from .entropy import EntropySource, read_random

MIN_WEIGHT = 8
MAX_WEIGHT = WORD_BITS - MIN_WEIGHT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Block:
    """A named run of accepted words, emitted as one array."""

    name: str
    words: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.words)


def _check_word(word: int) -> int:
    if not isinstance(word, numbers.Integral):
        raise TypeError(f"expected an integer word, got {type(word).__name__}")
    word = int(word)
    if word < 0 or word > WORD_MASK:
        raise ValueError(f"{word:#x} is not an unsigned 32-bit word")
    return word


def hamming_weight(word: int) -> int:
    """Count set bits with Kernighan's method."""

    x = _check_word(word)
    weight = 0
    while x:
        x &= x - 1  # clear the least significant set bit
        weight += 1
    return weight


def word_bytes(word: int) -> Tuple[int, ...]:
    """Split ``word`` into its four bytes, least significant first.

    The split works on the numeric value, so it does not depend on host byte
    order. Raw words are decoded little-endian, which makes these the bytes in
    the order they arrived from the entropy source.
    """

    word = _check_word(word)
    return tuple((word >> (8 * index)) & 0xFF for index in range(WORD_BYTES))


def accept(word: int) -> bool:
    """Return ``True`` if ``word`` is fit to seed a pool."""

    weight = hamming_weight(word)
    if weight < MIN_WEIGHT or weight > MAX_WEIGHT:
        return False
    for byte in word_bytes(word):
        if byte in (0x00, 0xFF):
            return False
    return True


def _allocate(n_words: int) -> _np.ndarray:
    try:
        return _np.zeros(n_words, dtype=_np.uint32)
    except MemoryError as exc:
        raise AllocationFailure(
            f"could not allocate {n_words} words, cannot continue"
        ) from exc


def _draw_word(source: EntropySource) -> int:
    (word,) = WORD_STRUCT.unpack(read_random(source, WORD_BYTES))
    return word


def generate_block(source: EntropySource, n_words: int, name: str) -> Block:
    """Draw ``n_words`` words from ``source`` and replace any that fail :func:`accept`.

    The initial words come from a single bulk read. Each rejected position is
    then re-drawn one word at a time until it passes. In theory that loop could
    run for a very long time; with any sensible predicate and input anywhere
    near random it practically never does, and a finite source ends it with
    :class:`~poolseed.common.ShortRead`.
    """

    if n_words < 1:
        raise ValueError(f"n_words must be at least 1, got {n_words}")

    data = _allocate(n_words)
    raw = read_random(source, WORD_BYTES * n_words)
    data[:] = _np.frombuffer(raw, dtype=WORD_DTYPE)

    redraws = 0
    for index in range(n_words):
        word = int(data[index])
        while not accept(word):
            logger.debug("%s[%d]: rejected 0x%08x", name, index, word)
            word = _draw_word(source)
            redraws += 1
        data[index] = word

    logger.info("Generated %s: %d words, %d redrawn", name, n_words, redraws)
    return Block(name=name, words=tuple(int(word) for word in data))
