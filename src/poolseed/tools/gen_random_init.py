"""Generate random initialisers for the kernel random driver.

The header is written to stdout; the build is expected to redirect it into a
file, compile it into the driver and delete it afterwards so every build gets
fresh data and the values in use are not left lying in the build directory.

This only gives each compiled kernel, not each installation, a different seed.
It does no harm and can make attacks harder, but it is no substitute for a
trustworthy hardware RNG or securely stored seed data.

Two entry points exist because the hash constants block is a build-time
choice: ``gen-random-init`` emits the pools only, ``gen-random-init-gcm``
also emits the constants used by the GCM-style hash. Neither accepts
arguments.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional, Sequence

from ..common import (
    DEFAULT_CONFIG,
    GCM_CONFIG,
    PROGRAM_NAME,
    HeaderConfig,
    PoolSeedError,
    UsageError,
)
from ..emit import build_header
from ..entropy import DeviceEntropySource, EntropySource

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Emit filtered random constants for the random driver",
        add_help=False,
    )
    args, extra = parser.parse_known_args(
        list(sys.argv[1:] if argv is None else argv)
    )
    if extra:
        raise UsageError(parser.format_usage().strip())
    return args


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    config: HeaderConfig = DEFAULT_CONFIG,
    source_factory: Callable[[], EntropySource] = DeviceEntropySource,
) -> int:
    try:
        _parse_args(argv)
        with source_factory() as source:
            header = build_header(source, config)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        return 1
    except PoolSeedError as exc:
        print(f"{PROGRAM_NAME}: {exc}", file=sys.stderr)
        return 1

    sys.stdout.write(header)
    sys.stdout.flush()
    logger.debug("Wrote %d characters of header", len(header))
    return 0


def main_gcm(argv: Optional[Sequence[str]] = None) -> int:
    return main(argv, config=GCM_CONFIG)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
