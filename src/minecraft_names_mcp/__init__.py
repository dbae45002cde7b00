"""
Minecraft Names MCP Server

An MCP server for checking availability of Minecraft nicks.
"""

__version__ = "0.1.0"


def main():
    """Main entry point for the CLI."""
    import sys

    # Handle CLI arguments before importing heavy dependencies
    if "--help" in sys.argv or "-h" in sys.argv:
        print_help()
        sys.exit(0)

    if "--version" in sys.argv or "-V" in sys.argv:
        print(f"minecraft-names-mcp {__version__}")
        sys.exit(0)

    if "--setup" in sys.argv:
        run_setup()
        sys.exit(0)

    if "--show-config" in sys.argv:
        show_config()
        sys.exit(0)

    setup_logging()

    # Default: run the MCP server
    from .server import mcp
    mcp.run()


def setup_logging():
    """Log to stderr; stdout carries MCP traffic."""
    import logging
    import os
    import sys

    level = logging.DEBUG if os.environ.get("MINECRAFT_NAMES_DEBUG") else logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def print_help():
    """Print help message."""
    print(f"""minecraft-names-mcp {__version__}

An MCP server for checking availability of Minecraft nicks.

Usage:
    minecraft-names-mcp               Run the MCP server
    minecraft-names-mcp --setup       Configure pacing, timeout and relays interactively
    minecraft-names-mcp --show-config Show current configuration
    minecraft-names-mcp --version     Show version
    minecraft-names-mcp --help        Show this help

Configuration:
    Works out of the box: Mojang is queried directly, with CORS relays as fallback.

    Settings (environment variable, else config file, else default):
        MINECRAFT_NAMES_DELAY     Seconds between nicks (default: 0.5)
        MINECRAFT_NAMES_TIMEOUT   Per-request timeout in seconds (default: 8)
        MINECRAFT_NAMES_RELAYS    Comma-separated relay order
                                  (default: allorigins,corsproxy,cors-anywhere,codetabs)
        MINECRAFT_NAMES_DEBUG     Set to 1 for verbose logging

Claude Code Setup:
    Add to ~/.claude/settings.json:
    {{
      "mcpServers": {{
        "minecraft-names": {{
          "command": "uvx",
          "args": ["minecraft-names-mcp"]
        }}
      }}
    }}
""")


def _prompt_float(label: str, current: float) -> float | None:
    raw = input(f"{label} [{current}]: ").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        print(f"  ✗ Not a number, keeping {current}")
        return None
    if value < 0:
        print(f"  ✗ Must not be negative, keeping {current}")
        return None
    return value


def run_setup():
    """Interactive setup wizard."""
    from .config import (
        get_config_file,
        get_pacing_delay,
        get_relay_names,
        get_request_timeout,
        save_config,
    )
    from .endpoints import get_supported_relays, is_relay_supported

    print("=" * 50)
    print("Minecraft Names MCP - Setup")
    print("=" * 50)
    print()
    print("Press Enter to keep the current value.")
    print()

    values = {
        "pacing_delay": _prompt_float("Delay between nicks (seconds)", get_pacing_delay()),
        "request_timeout": _prompt_float("Per-request timeout (seconds)", get_request_timeout()),
    }

    print()
    print(f"Available relays: {', '.join(get_supported_relays())}")
    raw = input(f"Relay order [{','.join(get_relay_names())}]: ").strip()
    if raw:
        relays = [r.strip().lower() for r in raw.split(",") if r.strip()]
        unknown = [r for r in relays if not is_relay_supported(r)]
        if unknown:
            print(f"  ✗ Unknown relays: {', '.join(unknown)} (ignored)")
        values["relays"] = [r for r in relays if is_relay_supported(r)]

    if save_config(values):
        print(f"\n✓ Configuration saved to {get_config_file()}")
    else:
        print("\n✗ Failed to save configuration")
        return

    print()
    print("Setup complete!")


def show_config():
    """Show current configuration."""
    from .config import (
        get_config_file,
        get_pacing_delay,
        get_relay_names,
        get_request_timeout,
        get_setting_source,
    )

    print("Configuration")
    print("=" * 50)
    print()

    config_file = get_config_file()
    print(f"Config file: {config_file}")
    print(f"  Exists: {config_file.exists()}")
    print()

    print(f"Delay between nicks: {get_pacing_delay()}s")
    print(f"  Source: {get_setting_source('pacing_delay')}")
    print(f"Request timeout: {get_request_timeout()}s")
    print(f"  Source: {get_setting_source('request_timeout')}")

    relays = get_relay_names()
    print(f"Relays: {', '.join(relays) if relays else 'none (Mojang only)'}")
    print(f"  Source: {get_setting_source('relays')}")
