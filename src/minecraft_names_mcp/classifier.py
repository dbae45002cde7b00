"""
Response classification for Mojang profile lookups.

Maps (endpoint role, HTTP status, body) to a signal telling the resolver
whether to stop with an answer or move on to the next endpoint.

Only an `id` or `name` in a JSON object is trusted from any source. Every
other signal is trusted from Mojang directly but not from a relay, since a
relay can fail or rewrite the response in its own way.
"""

import json
from dataclasses import dataclass
from enum import Enum

import httpx

from .endpoints import EndpointRole


class Signal(Enum):
    """Outcome of classifying one endpoint response."""

    AVAILABLE = "available"  # definitive - nick is free
    TAKEN = "taken"  # definitive - nick is registered
    UNDECIDED = "undecided"  # ambiguous - try next endpoint
    RETRYABLE = "retryable"  # error status - try next endpoint


@dataclass(frozen=True)
class Classification:
    """Signal plus a short human-readable reason."""

    signal: Signal
    reason: str

    @property
    def definitive(self) -> bool:
        return self.signal in (Signal.AVAILABLE, Signal.TAKEN)


# Keys proving the profile exists
_IDENTITY_KEYS = ("id", "name")

# Keys Mojang uses for "no such profile"
_ERROR_KEYS = ("error", "errorMessage")


def _status_text(status_code: int) -> str:
    phrase = httpx.codes.get_reason_phrase(status_code)
    return f"HTTP {status_code} {phrase}".rstrip()


def _has_value(data: dict, keys: tuple[str, ...]) -> bool:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str):
            if value.strip():
                return True
        elif value:
            return True
    return False


def classify(role: EndpointRole, status_code: int, body: str | None) -> Classification:
    """
    Classify one endpoint response.

    Args:
        role: Whether the response came from Mojang or from a relay
        status_code: HTTP status of the response
        body: Full response body as text (None is treated as empty)

    Returns:
        Classification with AVAILABLE, TAKEN, UNDECIDED or RETRYABLE signal.
    """
    from_relay = role == EndpointRole.RELAY

    if status_code in (403, 429):
        return Classification(Signal.RETRYABLE, _status_text(status_code))

    if status_code == 204:
        return Classification(Signal.AVAILABLE, "No profile (204)")

    if status_code == 404:
        if from_relay:
            # Could be the relay's own 404 rather than Mojang's
            return Classification(Signal.RETRYABLE, _status_text(status_code))
        return Classification(Signal.AVAILABLE, "No profile (404)")

    if status_code != 200:
        return Classification(Signal.RETRYABLE, _status_text(status_code))

    text = (body or "").strip()

    if text == "" or text == "null":
        if from_relay:
            return Classification(Signal.UNDECIDED, "Empty response from relay")
        return Classification(Signal.AVAILABLE, "Empty profile response")

    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        if from_relay:
            return Classification(Signal.UNDECIDED, "Non-JSON response from relay")
        # Unparseable 200 from Mojang counts as taken
        return Classification(Signal.TAKEN, "Non-JSON profile response")

    if isinstance(data, dict):
        if _has_value(data, _IDENTITY_KEYS):
            return Classification(Signal.TAKEN, "Profile found")

        if _has_value(data, _ERROR_KEYS):
            return Classification(Signal.AVAILABLE, "Profile not found")

    if from_relay:
        return Classification(Signal.RETRYABLE, "Unrecognized JSON from relay")
    return Classification(Signal.AVAILABLE, "No profile fields in response")
