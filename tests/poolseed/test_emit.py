"""Tests for rendering generated blocks as C source."""

from __future__ import annotations

import re
import struct
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from poolseed.common import (
    DEFAULT_CONFIG,
    GCM_CONFIG,
    HashConstantsLayout,
    PoolGeometry,
    ShortRead,
)
from poolseed.emit import build_header, format_block, generate_blocks, render_header
from poolseed.entropy import ReplayEntropySource
from poolseed.filtering import Block, accept

GOOD_WORDS = (0x12345678, 0x3C3C3C3C, 0x0F0F0F0F, 0x5A5A5A5A, 0x2468ACE1)


def _good_stream(n_words: int) -> bytes:
    words = [GOOD_WORDS[i % len(GOOD_WORDS)] for i in range(n_words)]
    return struct.pack(f"<{n_words}I", *words)


def test_pool_geometry_defaults() -> None:
    geometry = PoolGeometry()
    assert geometry.input_pool_words == 128
    assert geometry.output_pool_words == 32
    assert geometry.total_pool_words == 192


def test_hash_layout_defaults() -> None:
    layout = HashConstantsLayout()
    assert layout.array_words == 32
    assert layout.block_words == 40


def test_format_block_wraps_every_eight_words() -> None:
    block = Block("pools", tuple(range(1, 11)))
    assert format_block(block) == (
        "static u32 pools[] = {\n"
        "0x00000001, 0x00000002, 0x00000003, 0x00000004, "
        "0x00000005, 0x00000006, 0x00000007, 0x00000008,\n"
        "0x00000009, 0x0000000a } ;\n"
        "\n"
    )


def test_format_block_full_line_closes_without_wrap() -> None:
    block = Block("x", tuple([0xDEADBEEF] * 8))
    text = format_block(block)
    assert text.endswith("0xdeadbeef } ;\n\n")
    assert ",\n" not in text


def test_format_block_single_word() -> None:
    assert format_block(Block("one", (0x12345678,))) == (
        "static u32 one[] = {\n0x12345678 } ;\n\n"
    )


def test_format_block_rejects_empty_block() -> None:
    with pytest.raises(ValueError):
        format_block(Block("empty", ()))


def test_build_header_pools_only() -> None:
    source = ReplayEntropySource(_good_stream(192))

    header = build_header(source, DEFAULT_CONFIG)

    assert header.startswith(
        "/* File generated by gen_random_init */\n\n"
        "#define INPUT_POOL_WORDS 128\n"
        "#define OUTPUT_POOL_WORDS 32\n"
        "#define INPUT_POOL_SHIFT 12\n\n"
        "static u32 pools[] = {\n"
        "0x12345678, 0x3c3c3c3c, 0x0f0f0f0f, 0x5a5a5a5a, "
    )
    assert header.endswith(" } ;\n\n")
    assert "ARRAY_WORDS" not in header
    assert "counter" not in header
    literals = re.findall(r"0x[0-9a-f]{8}", header)
    assert len(literals) == 192
    assert all(accept(int(value, 16)) for value in literals)
    assert source.remaining == 0


def test_build_header_with_hash_constants() -> None:
    source = ReplayEntropySource(_good_stream(192 + 40))

    header = build_header(source, GCM_CONFIG)

    pools, _, rest = header.partition("#define ARRAY_WORDS 32\n\n")
    assert rest, "hash constants section missing"
    assert len(re.findall(r"0x[0-9a-f]{8}", pools)) == 192
    assert rest.startswith("static u32 constants[] = {\n")
    assert len(re.findall(r"0x[0-9a-f]{8}", rest)) == 40
    assert header.endswith(" } ;\n\nstatic u32 *counter = constants + ARRAY_WORDS ;\n")


def test_generate_blocks_orders_pools_first() -> None:
    source = ReplayEntropySource(_good_stream(192 + 40))
    blocks = generate_blocks(source, GCM_CONFIG)
    assert [(block.name, len(block)) for block in blocks] == [
        ("pools", 192),
        ("constants", 40),
    ]


def test_build_header_fails_without_partial_output() -> None:
    # Enough for the pools but not for the hash constants block.
    source = ReplayEntropySource(_good_stream(192 + 10))
    with pytest.raises(ShortRead):
        build_header(source, GCM_CONFIG)


def test_render_header_checks_block_count() -> None:
    with pytest.raises(ValueError):
        render_header([Block("pools", (0x12345678,))], GCM_CONFIG)
