"""
Endpoint Chain Module

Defines the ordered list of endpoints used to look up a Minecraft nick:
the Mojang profile API queried directly, followed by generic HTTP-forwarding
relays that wrap the same Mojang URL.

The chain is static: it is built once from relay names and never changes
during a batch.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable
from urllib.parse import quote

# Mojang profile lookup
MOJANG_PROFILE_URL = "https://api.mojang.com/users/profiles/minecraft/"


class EndpointRole(Enum):
    """Trust level of an endpoint."""

    PRIMARY = "primary"  # authoritative, queried directly
    RELAY = "relay"  # forwarding service, fallback only


@dataclass(frozen=True)
class Endpoint:
    """One entry of the fallback chain."""

    name: str
    role: EndpointRole
    build_url: Callable[[str], str]

    @property
    def is_relay(self) -> bool:
        return self.role == EndpointRole.RELAY


def primary_url(nick: str) -> str:
    """Build the direct Mojang URL for a nick."""
    return MOJANG_PROFILE_URL + quote(nick, safe="")


def _allorigins(target: str) -> str:
    return f"https://api.allorigins.win/raw?url={quote(target, safe='')}"


def _corsproxy(target: str) -> str:
    return f"https://corsproxy.io/?{quote(target, safe='')}"


def _cors_anywhere(target: str) -> str:
    # Takes the target as a raw path suffix
    return f"https://cors-anywhere.herokuapp.com/{target}"


def _codetabs(target: str) -> str:
    return f"https://api.codetabs.com/v1/proxy?quest={quote(target, safe='')}"


# Relay name -> function wrapping the full Mojang URL
RELAY_BUILDERS: dict[str, Callable[[str], str]] = {
    "allorigins": _allorigins,
    "corsproxy": _corsproxy,
    "cors-anywhere": _cors_anywhere,
    "codetabs": _codetabs,
}

# Fallback order
DEFAULT_RELAYS = ["allorigins", "corsproxy", "cors-anywhere", "codetabs"]


def _relay_endpoint(name: str) -> Endpoint:
    wrap = RELAY_BUILDERS[name]
    return Endpoint(
        name=name,
        role=EndpointRole.RELAY,
        build_url=lambda nick: wrap(primary_url(nick)),
    )


def build_chain(relays: list[str] | None = None, include_primary: bool = True) -> list[Endpoint]:
    """
    Build the endpoint chain.

    Args:
        relays: Relay names in fallback order (default: DEFAULT_RELAYS).
                Unknown names raise KeyError.
        include_primary: If False, the chain holds relays only.

    Returns:
        Ordered list of Endpoint descriptors, primary first.
    """
    if relays is None:
        relays = DEFAULT_RELAYS

    chain = []
    if include_primary:
        chain.append(Endpoint(name="mojang", role=EndpointRole.PRIMARY, build_url=primary_url))

    for name in relays:
        chain.append(_relay_endpoint(name))

    return chain


def is_relay_supported(name: str) -> bool:
    """Check if a relay name has a URL builder."""
    return name in RELAY_BUILDERS


def get_supported_relays() -> list[str]:
    """Get relay names in default fallback order."""
    return list(DEFAULT_RELAYS)
