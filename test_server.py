#!/usr/bin/env python3
"""
Test suite for Minecraft Names MCP Server

Usage:
    source .venv/bin/activate
    python test_server.py

Nick checks run against httpx.MockTransport; no network is needed.
"""

import functools
import json
import sys
import tempfile

import anyio

from testkit import ALLORIGINS, CORSPROXY, MOJANG, TestRunner, isolated_env, mock_transport

from minecraft_names_mcp import server
from minecraft_names_mcp.server import (
    VERSION,
    check_nicks,
    get_relays,
    version,
)

TAKEN = {"notch", "dinnerbone"}


def mojang(request):
    nick = request.url.path.rsplit("/", 1)[-1]
    if nick.lower() == "blocked":
        return (429, "")
    if nick.lower() in TAKEN:
        return (200, {"id": "abc", "name": nick})
    return (404, "")


ROUTES = {MOJANG: mojang, ALLORIGINS: (403, ""), CORSPROXY: (403, "")}


async def run_tool_tests(runner: TestRunner):
    # =========================================================================
    # Static tools
    # =========================================================================
    runner.section("version / get_relays")

    runner.test("version string", version() == f"Minecraft Names MCP Server version {VERSION}")

    with tempfile.TemporaryDirectory() as tmp, isolated_env(tmp, MINECRAFT_NAMES_RELAYS="allorigins,corsproxy"):
        data = json.loads(get_relays())
        runner.test(
            "primary template",
            data["primary"] == "https://api.mojang.com/users/profiles/minecraft/{nick}",
            data["primary"],
        )
        runner.test("relays follow config", data["relays"] == ["allorigins", "corsproxy"], f"got {data['relays']}")

    # =========================================================================
    # check_nicks input validation
    # =========================================================================
    runner.section("check_nicks - validation")

    data = json.loads(await check_nicks([]))
    runner.test("empty list -> error", data == {"error": "No nicks provided"}, f"got {data}")

    data = json.loads(await check_nicks(["", "   "]))
    runner.test("blank entries -> error", data == {"error": "No nicks provided"}, f"got {data}")

    # =========================================================================
    # check_nicks with a mocked chain
    # =========================================================================
    runner.section("check_nicks - results")

    original = server._check_nicks_internal
    server._check_nicks_internal = functools.partial(
        original, transport=mock_transport(ROUTES), delay=0
    )
    try:
        with tempfile.TemporaryDirectory() as tmp, isolated_env(tmp, MINECRAFT_NAMES_RELAYS="allorigins,corsproxy"):
            data = json.loads(await check_nicks(["Notch", " zzfree ", "blocked", "notch", "Afree"]))

            runner.test("available sorted", data.get("available") == ["Afree", "zzfree"], f"got {data}")
            runner.test("taken deduplicated", data.get("taken") == ["notch"], f"got {data.get('taken')}")
            runner.test("errors listed", [e["nick"] for e in data.get("errors", [])] == ["blocked"])
            runner.test(
                "error explains exhaustion",
                "exhausted" in data["errors"][0]["error"],
                data["errors"][0]["error"],
            )
            runner.test(
                "summary counts",
                data.get("summary") == {"total": 4, "available": 2, "taken": 1, "errors": 1},
                f"got {data.get('summary')}",
            )

            data = json.loads(await check_nicks(["Notch", "Afree"], onlyReportAvailable=True))
            runner.test("onlyReportAvailable keeps available", data.get("available") == ["Afree"])
            runner.test("onlyReportAvailable drops taken", "taken" not in data)
            runner.test("onlyReportAvailable drops errors", "errors" not in data)
            runner.test("onlyReportAvailable keeps summary", data["summary"]["total"] == 2)
    finally:
        server._check_nicks_internal = original


def test_tools():
    runner = TestRunner()
    anyio.run(run_tool_tests, runner)
    assert not runner.failures(), runner.failures()


async def main_async():
    runner = TestRunner()

    print("\n" + "=" * 60)
    print("  MINECRAFT NAMES MCP SERVER - TEST SUITE")
    print("=" * 60)

    await run_tool_tests(runner)

    return runner.summary()


def main():
    result = anyio.run(main_async)
    sys.exit(0 if result else 1)


if __name__ == "__main__":
    main()
