"""
Async Nick Resolver with Relay Fallback

Looks up one Minecraft nick at a time: Mojang first, then each relay in
order, stopping at the first response the classifier trusts.
"""

import logging
from dataclasses import dataclass
from enum import Enum

import httpx

from .classifier import Signal, classify
from .endpoints import Endpoint, EndpointRole, build_chain

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 8.0
GENERIC_FAILURE = "Could not verify nick"


class NickStatus(Enum):
    """Status categories for nick availability checks."""

    AVAILABLE = "available"  # no Mojang profile
    TAKEN = "taken"  # profile exists
    ERROR = "error"  # every endpoint failed - retry later


@dataclass(frozen=True)
class Verdict:
    """Result of a nick availability check."""

    nick: str
    status: NickStatus
    error_message: str | None = None
    endpoint: str | None = None  # endpoint that gave the answer

    @property
    def available(self) -> bool:
        """True only if confirmed available."""
        return self.status == NickStatus.AVAILABLE

    @property
    def error(self) -> str | None:
        return self.error_message


@dataclass
class EndpointAttempt:
    """Raw outcome of one request; never kept past a single resolve()."""

    endpoint: str
    role: EndpointRole
    ordinal: int
    status_code: int | None = None
    body: str | None = None
    error: Exception | None = None


# =============================================================================
# Errors
# =============================================================================

class ResolutionError(Exception):
    """Base class for resolver failures."""


class NetworkFailure(ResolutionError):
    """Transport-level failure (DNS, TLS, refused, timeout)."""


class RateLimited(ResolutionError):
    """403 or 429 from an endpoint."""


class AmbiguousResponse(ResolutionError):
    """Response too ambiguous to trust."""


class EndpointFailure(ResolutionError):
    """Unexpected status or untrusted relay answer."""


class ChainExhausted(ResolutionError):
    """Every endpoint was tried without a definitive answer."""


def _looks_like_connectivity(failure: ResolutionError) -> bool:
    if isinstance(failure, NetworkFailure):
        return True
    message = str(failure).lower()
    return "failed to fetch" in message or "cross-origin" in message


def _exhaustion_message(failure: ResolutionError | None, attempts: int) -> str:
    if failure is None:
        return GENERIC_FAILURE
    if _looks_like_connectivity(failure):
        return (
            f"Connection error: all {attempts} endpoints exhausted. "
            "Check your internet connection."
        )
    if isinstance(failure, RateLimited):
        return (
            f"All {attempts} endpoints exhausted (last failure: {failure}). "
            "Check connectivity or try again later."
        )
    return str(failure)


class AsyncNickResolver:
    """
    Async Mojang nick resolver with ordered relay fallback.

    Usage:
        async with AsyncNickResolver() as resolver:
            verdict = await resolver.resolve("Notch")
    """

    def __init__(
        self,
        chain: list[Endpoint] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._chain = build_chain() if chain is None else list(chain)
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def chain(self) -> list[Endpoint]:
        return list(self._chain)

    async def __aenter__(self) -> "AsyncNickResolver":
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            headers={
                "Accept": "application/json",
                "Cache-Control": "no-cache",
                "Pragma": "no-cache",
            },
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _attempt(self, endpoint: Endpoint, ordinal: int, nick: str) -> EndpointAttempt:
        """Perform one GET against one endpoint."""
        attempt = EndpointAttempt(endpoint=endpoint.name, role=endpoint.role, ordinal=ordinal)

        try:
            url = endpoint.build_url(nick)
        except UnicodeEncodeError as e:
            attempt.error = EndpointFailure(f"Nick cannot be encoded in a URL for {endpoint.name}")
            attempt.error.__cause__ = e
            return attempt

        # No credentials: drop anything a previous endpoint set
        self._client.cookies.clear()

        try:
            response = await self._client.get(url)
            attempt.status_code = response.status_code
            attempt.body = response.text
        except httpx.TimeoutException as e:
            attempt.error = NetworkFailure(f"Request to {endpoint.name} timed out after {self._timeout}s")
            attempt.error.__cause__ = e
        except httpx.HTTPError as e:
            attempt.error = NetworkFailure(f"Failed to fetch from {endpoint.name}: {e}")
            attempt.error.__cause__ = e

        return attempt

    async def resolve(self, nick: str) -> Verdict:
        """
        Resolve a nick to AVAILABLE or TAKEN.

        Raises:
            ChainExhausted: no endpoint gave a definitive answer.
        """
        if self._client is None:
            raise RuntimeError("Client not initialized. Use 'async with' context.")

        last_failure: ResolutionError | None = None

        for ordinal, endpoint in enumerate(self._chain):
            attempt = await self._attempt(endpoint, ordinal, nick)

            if attempt.error is not None:
                logger.debug("%s: %s failed: %s", nick, endpoint.name, attempt.error)
                last_failure = attempt.error
                continue

            result = classify(attempt.role, attempt.status_code, attempt.body)
            logger.debug(
                "%s: %s returned %s -> %s (%s)",
                nick, endpoint.name, attempt.status_code, result.signal.value, result.reason,
            )

            if result.signal == Signal.AVAILABLE:
                return Verdict(nick=nick, status=NickStatus.AVAILABLE, endpoint=endpoint.name)
            if result.signal == Signal.TAKEN:
                return Verdict(nick=nick, status=NickStatus.TAKEN, endpoint=endpoint.name)

            if result.signal == Signal.UNDECIDED:
                last_failure = AmbiguousResponse(f"{result.reason} ({endpoint.name})")
            elif attempt.status_code in (403, 429):
                last_failure = RateLimited(result.reason)
            else:
                last_failure = EndpointFailure(result.reason)

        message = _exhaustion_message(last_failure, len(self._chain))
        logger.info("%s: %s", nick, message)
        raise ChainExhausted(message)

    async def check_nick(self, nick: str) -> Verdict:
        """Like resolve(), but reports exhaustion as an ERROR verdict."""
        try:
            return await self.resolve(nick)
        except ChainExhausted as e:
            return Verdict(nick=nick, status=NickStatus.ERROR, error_message=str(e))


async def check_nick_async(
    nick: str,
    timeout: float = DEFAULT_TIMEOUT,
    relays: list[str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Verdict:
    """
    Convenience function for checking one nick without managing client lifecycle.

    Args:
        nick: Minecraft nick to check
        timeout: Per-request timeout in seconds
        relays: Relay names in fallback order (default: all)
        transport: Optional httpx transport (tests pass a MockTransport)

    Returns:
        Verdict (ERROR status if every endpoint failed)
    """
    resolver = AsyncNickResolver(chain=build_chain(relays), timeout=timeout, transport=transport)
    async with resolver:
        return await resolver.check_nick(nick)
