"""
Shared helpers for the test scripts.

Each test_*.py runs standalone (`python test_x.py`) through TestRunner, and
also exposes test_* functions so pytest collects the same checks.
"""

import json
import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass

import httpx

# Make the src/ layout importable without installing
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

# Hosts of the default chain
MOJANG = "api.mojang.com"
ALLORIGINS = "api.allorigins.win"
CORSPROXY = "corsproxy.io"
CORS_ANYWHERE = "cors-anywhere.herokuapp.com"
CODETABS = "api.codetabs.com"

# Outcomes that raise instead of responding
CONNECT_ERROR = "connect_error"
TIMEOUT = "timeout"


@dataclass
class TestResult:
    """Result of a single test."""

    __test__ = False

    name: str
    passed: bool
    message: str = ""


class TestRunner:
    """Runs tests and collects results."""

    __test__ = False

    def __init__(self):
        self.results: list[TestResult] = []
        self.current_section: str = ""

    def section(self, name: str):
        """Start a new test section."""
        self.current_section = name
        print(f"\n{'=' * 60}")
        print(f"  {name}")
        print(f"{'=' * 60}")

    def test(self, name: str, condition: bool, message: str = ""):
        """Record a test result."""
        result = TestResult(
            name=f"{self.current_section}: {name}", passed=condition, message=message
        )
        self.results.append(result)

        if condition:
            print(f"  ✓ {name}")
        else:
            print(f"  ✗ {name}")
            if message:
                print(f"    → {message}")

    def failures(self) -> list[str]:
        return [f"{r.name} ({r.message})" if r.message else r.name for r in self.results if not r.passed]

    def summary(self) -> bool:
        """Print summary and return True if all tests passed."""
        passed = sum(1 for r in self.results if r.passed)
        failed = sum(1 for r in self.results if not r.passed)
        total = len(self.results)

        print(f"\n{'=' * 60}")
        print(f"  SUMMARY: {passed}/{total} passed, {failed} failed")
        print(f"{'=' * 60}")

        if failed > 0:
            print("\nFailed tests:")
            for r in self.results:
                if not r.passed:
                    print(f"  ✗ {r.name}")
                    if r.message:
                        print(f"    → {r.message}")

        return failed == 0


def mock_transport(routes: dict, calls: list | None = None) -> httpx.MockTransport:
    """
    Build a MockTransport answering by host.

    Args:
        routes: host -> (status, body), CONNECT_ERROR or TIMEOUT, or a
                callable taking the request and returning one of those.
                Unrouted hosts fail to connect.
        calls: If given, every request is appended to it.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)

        outcome = routes.get(request.url.host, CONNECT_ERROR)
        if callable(outcome):
            outcome = outcome(request)

        if outcome == CONNECT_ERROR:
            raise httpx.ConnectError("Failed to establish a new connection", request=request)
        if outcome == TIMEOUT:
            raise httpx.ReadTimeout("timed out", request=request)

        status, body = outcome
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler)


def hosts(calls: list) -> list[str]:
    """Hosts of recorded requests, in order."""
    return [request.url.host for request in calls]


@contextmanager
def isolated_env(config_home: str, **env: str):
    """Point the config dir at config_home and set MINECRAFT_NAMES_* vars."""
    keys = ["XDG_CONFIG_HOME", "MINECRAFT_NAMES_DELAY", "MINECRAFT_NAMES_TIMEOUT", "MINECRAFT_NAMES_RELAYS"]
    saved = {k: os.environ.get(k) for k in keys}
    try:
        for k in keys:
            os.environ.pop(k, None)
        os.environ["XDG_CONFIG_HOME"] = config_home
        for k, v in env.items():
            os.environ[k] = v
        yield
    finally:
        for k, v in saved.items():
            if v is None:
                os.environ.pop(k, None)
            else:
                os.environ[k] = v
