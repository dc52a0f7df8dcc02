"""Render accepted blocks as C source for inclusion by the random driver."""

from __future__ import annotations

from typing import List, Sequence

from .common import DEFAULT_CONFIG, PROGRAM_NAME, HeaderConfig
from .entropy import EntropySource
from .filtering import Block, generate_block

PER_LINE = 8
POOLS_NAME = "pools"
CONSTANTS_NAME = "constants"


def format_block(block: Block, *, per_line: int = PER_LINE) -> str:
    """Format ``block`` as a ``static u32`` array, ``per_line`` words per line."""

    if not block.words:
        raise ValueError(f"block {block.name!r} has no words")
    parts = [f"static u32 {block.name}[] = {{\n"]
    last = len(block.words) - 1
    for index, word in enumerate(block.words):
        parts.append(f"0x{word:08x}")
        if index == last:
            parts.append(" } ;\n")
        elif index % per_line == per_line - 1:
            parts.append(",\n")
        else:
            parts.append(", ")
    parts.append("\n")
    return "".join(parts)


def generate_blocks(
    source: EntropySource, config: HeaderConfig = DEFAULT_CONFIG
) -> List[Block]:
    """Generate every block ``config`` asks for, in emission order."""

    blocks = [generate_block(source, config.geometry.total_pool_words, POOLS_NAME)]
    if config.include_hash_constants:
        blocks.append(
            generate_block(source, config.hash_layout.block_words, CONSTANTS_NAME)
        )
    return blocks


def render_header(
    blocks: Sequence[Block], config: HeaderConfig = DEFAULT_CONFIG
) -> str:
    """Assemble the generated header from already generated ``blocks``."""

    expected = 2 if config.include_hash_constants else 1
    if len(blocks) != expected:
        raise ValueError(f"expected {expected} blocks, got {len(blocks)}")

    geometry = config.geometry
    lines = [
        f"/* File generated by {PROGRAM_NAME} */\n\n",
        # Echo the pool sizes so the driver is built against the same values.
        f"#define INPUT_POOL_WORDS {geometry.input_pool_words}\n",
        f"#define OUTPUT_POOL_WORDS {geometry.output_pool_words}\n",
        f"#define INPUT_POOL_SHIFT {geometry.input_pool_shift}\n\n",
        format_block(blocks[0]),
    ]
    if config.include_hash_constants:
        lines.append(f"#define ARRAY_WORDS {config.hash_layout.array_words}\n\n")
        lines.append(format_block(blocks[1]))
        lines.append(
            f"static u32 *counter = {blocks[1].name} + ARRAY_WORDS ;\n"
        )
    return "".join(lines)


def build_header(
    source: EntropySource, config: HeaderConfig = DEFAULT_CONFIG
) -> str:
    """Generate and render a complete header.

    All blocks are generated before any text is produced, so a failed read
    never leaves a partial header behind.
    """

    return render_header(generate_blocks(source, config), config)
