# tests/fakes.py

from __future__ import annotations

import asyncio

from tasklist.core.errors import StorageUnavailable


class FakeBlobStore:
    """
    In-memory BlobStore for unit tests.

    - Captures every write for assertions
    - Can be told to fail reads/writes
    - Can hold individual writes (or the read) on an asyncio.Event, to force
      a specific completion order
    """

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})
        self.writes: list[tuple[str, str]] = []
        self.reads: list[str] = []
        self.fail_reads = False
        self.fail_writes = False
        self.read_gate: asyncio.Event | None = None
        # Consumed in the order writes start; None means "don't hold".
        self.write_gates: list[asyncio.Event | None] = []
        self.closed = False

    async def read(self, key: str) -> str | None:
        self.reads.append(key)
        if self.read_gate is not None:
            await self.read_gate.wait()
        if self.fail_reads:
            raise StorageUnavailable("device storage is locked")
        return self.data.get(key)

    async def write(self, key: str, blob: str) -> None:
        self.writes.append((key, blob))
        gate = self.write_gates.pop(0) if self.write_gates else None
        if gate is not None:
            await gate.wait()
        if self.fail_writes:
            raise StorageUnavailable("disk full")
        self.data[key] = blob

    def close(self) -> None:
        self.closed = True


async def settle(rounds: int = 10) -> None:
    """Let already-scheduled tasks run for a few loop iterations."""
    for _ in range(rounds):
        await asyncio.sleep(0)
