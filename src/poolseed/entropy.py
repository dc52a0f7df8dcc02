"""Entropy source adapters.

The generator never opens devices itself: callers construct exactly one
source, hand it to :func:`poolseed.filtering.generate_block`, and close it
when they are done. Reads either return the full request or raise
:class:`~poolseed.common.ShortRead`; there is no retry at this level.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
import os
from typing import BinaryIO

from .common import DEFAULT_ENTROPY_DEVICE, EntropyUnavailable, ShortRead

logger = logging.getLogger(__name__)


class EntropySource(ABC):
    """Minimal interface shared by every entropy source."""

    @abstractmethod
    def read(self, n_bytes: int) -> bytes:
        """Return exactly ``n_bytes`` bytes or raise :class:`ShortRead`."""

    def close(self) -> None:
        """Release the underlying handle. Safe to call more than once."""

    def __enter__(self) -> "EntropySource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class DeviceEntropySource(EntropySource):
    """Read raw bytes from an OS random device such as ``/dev/urandom``."""

    def __init__(self, path: str | os.PathLike[str] = DEFAULT_ENTROPY_DEVICE) -> None:
        self.path = os.fspath(path)
        try:
            self._handle: BinaryIO | None = open(self.path, "rb", buffering=0)
        except OSError as exc:
            raise EntropyUnavailable(
                f"no {self.path}, cannot continue ({exc.strerror or exc})"
            ) from exc
        logger.debug("Opened entropy device %s", self.path)

    @property
    def closed(self) -> bool:
        return self._handle is None

    def read(self, n_bytes: int) -> bytes:
        if self._handle is None:
            raise EntropyUnavailable(f"{self.path} is already closed")
        # A single read() call, like the device interface itself: anything
        # shorter than requested is fatal rather than topped up.
        try:
            data = self._handle.read(n_bytes) or b""
        except OSError as exc:
            # A failed or interrupted read counts as reading nothing.
            raise ShortRead(n_bytes, 0) from exc
        if len(data) != n_bytes:
            raise ShortRead(n_bytes, len(data))
        return data

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            logger.debug("Closed entropy device %s", self.path)


class ReplayEntropySource(EntropySource):
    """Serve a fixed byte string in order, then fail with :class:`ShortRead`.

    Useful for deterministic fixtures: the stream is the bulk draw followed by
    any replacement words, exactly as the generator would consume them.
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def read(self, n_bytes: int) -> bytes:
        chunk = self._data[self._offset : self._offset + n_bytes]
        self._offset += len(chunk)
        if len(chunk) != n_bytes:
            raise ShortRead(n_bytes, len(chunk))
        return chunk


def read_random(source: EntropySource, n_bytes: int) -> bytes:
    """Return exactly ``n_bytes`` fresh bytes from ``source``."""

    if n_bytes < 0:
        raise ValueError(f"n_bytes must be non-negative, got {n_bytes}")
    return source.read(n_bytes)
