"""
Batch checking of nick lists.

Nicks are resolved strictly one at a time with a pause between them so the
Mojang API and the relays do not start rate limiting. NickBatch owns the
result map; nothing else writes to it.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import httpx

from .endpoints import build_chain
from .resolver import DEFAULT_TIMEOUT, AsyncNickResolver, ChainExhausted, NickStatus

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.5


class RecordStatus(Enum):
    CHECKING = "checking"
    AVAILABLE = "available"
    TAKEN = "taken"
    ERROR = "error"


_VERDICT_TO_RECORD = {
    NickStatus.AVAILABLE: RecordStatus.AVAILABLE,
    NickStatus.TAKEN: RecordStatus.TAKEN,
    NickStatus.ERROR: RecordStatus.ERROR,
}


@dataclass
class ResultRecord:
    """Latest known state of one nick in a batch."""

    nick: str
    status: RecordStatus = RecordStatus.CHECKING
    error_message: str | None = None


@dataclass
class BatchStats:
    total: int = 0
    available: int = 0
    taken: int = 0
    checking: int = 0
    errors: int = 0


def normalize_nick(nick: str) -> str:
    """Identity key for a nick (Mojang names are case-insensitive)."""
    return nick.lower()


def parse_nick_list(text: str) -> list[str]:
    """Split raw input into nicks, one per line, dropping blank lines."""
    nicks = []
    for line in text.split("\n"):
        line = line.strip()
        if line:
            nicks.append(line)
    return nicks


class NickBatch:
    """
    Runs a list of nicks through a resolver and tracks the results.

    Usage:
        batch = NickBatch()
        async with AsyncNickResolver() as resolver:
            stats = await batch.run(["Notch", "jeb_"], resolver)
        print(batch.available_nicks())
    """

    def __init__(self) -> None:
        self.results: dict[str, ResultRecord] = {}
        self.checking = False

    def reset(self) -> None:
        """Clear all records."""
        self.results.clear()

    def stop(self) -> None:
        """Ask a running batch to halt before its next nick."""
        self.checking = False

    def stats(self) -> BatchStats:
        stats = BatchStats()
        for record in self.results.values():
            stats.total += 1
            if record.status == RecordStatus.AVAILABLE:
                stats.available += 1
            elif record.status == RecordStatus.TAKEN:
                stats.taken += 1
            elif record.status == RecordStatus.CHECKING:
                stats.checking += 1
            else:
                stats.errors += 1
        return stats

    def available_nicks(self) -> list[str]:
        """Available nicks in alphabetical order, original casing."""
        return sorted(r.nick for r in self.results.values() if r.status == RecordStatus.AVAILABLE)

    def _set(self, record: ResultRecord) -> None:
        self.results[normalize_nick(record.nick)] = record

    async def run(
        self,
        nicks: list[str],
        resolver: AsyncNickResolver,
        delay: float = DEFAULT_DELAY,
        on_update: Callable[[ResultRecord], None] | None = None,
    ) -> BatchStats:
        """
        Check every nick in order.

        Args:
            nicks: Nicks to check (duplicates by case collapse to one record)
            resolver: An entered AsyncNickResolver
            delay: Seconds to wait between nicks
            on_update: Called with each record once its nick is resolved

        Returns:
            BatchStats after the run (or after stop()).
        """
        self.checking = True
        self.reset()

        for nick in nicks:
            self._set(ResultRecord(nick=nick))

        try:
            for index, nick in enumerate(nicks):
                if not self.checking:
                    logger.info("Batch stopped with %d nicks unchecked", len(nicks) - index)
                    break

                try:
                    verdict = await resolver.resolve(nick)
                    record = ResultRecord(nick=nick, status=_VERDICT_TO_RECORD[verdict.status])
                except ChainExhausted as e:
                    record = ResultRecord(nick=nick, status=RecordStatus.ERROR, error_message=str(e))

                self._set(record)
                if on_update:
                    on_update(record)

                if index < len(nicks) - 1:
                    await asyncio.sleep(delay)
        finally:
            self.checking = False

        return self.stats()


async def check_nicks_async(
    nicks: list[str],
    delay: float = DEFAULT_DELAY,
    timeout: float = DEFAULT_TIMEOUT,
    relays: list[str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    on_update: Callable[[ResultRecord], None] | None = None,
) -> NickBatch:
    """
    Convenience function for running a batch without managing the resolver.

    Returns:
        The finished NickBatch (records, stats, available list).
    """
    batch = NickBatch()
    resolver = AsyncNickResolver(chain=build_chain(relays), timeout=timeout, transport=transport)
    async with resolver:
        await batch.run(nicks, resolver, delay=delay, on_update=on_update)
    return batch
