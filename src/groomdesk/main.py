"""Groom Desk - Command line entry point.

Supports:
- sql: Print the SQL that creates or upgrades the backend schema
- check: Probe the backend schema with the configured credentials
- ui: Launch the Streamlit app
"""

import argparse
import subprocess
import sys
from pathlib import Path

from loguru import logger

from groomdesk.config.settings import configure_logging, load_config, load_settings
from groomdesk.core.backend import BackendGateway, create_backend_client
from groomdesk.core.schema import REQUIRED_SQL

APP_SCRIPT = Path(__file__).parent / "app" / "main.py"


def cmd_sql(args: argparse.Namespace) -> None:
    """Print the schema SQL to stdout for pasting into the SQL editor."""
    print(REQUIRED_SQL.strip())


def cmd_check(args: argparse.Namespace) -> None:
    """Run the schema probe against the configured backend."""
    logger.info("=== Checking backend schema ===")
    settings = load_settings()
    config = load_config(settings.app_config_path)

    try:
        client = create_backend_client(settings)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    probe = config.schema_probe
    status = BackendGateway(client).probe_schema(probe.table, probe.column)
    if not status.ok:
        logger.error(f"Schema is outdated: {status.detail}")
        logger.info("Run `groomdesk sql` and execute the output in the SQL editor")
        sys.exit(1)
    logger.success("✅ Backend schema is up to date")


def cmd_ui(args: argparse.Namespace) -> None:
    """Start the Streamlit server on the app script."""
    command = [sys.executable, "-m", "streamlit", "run", str(APP_SCRIPT)]
    if args.port:
        command += ["--server.port", str(args.port)]
    logger.info(f"Launching UI: {' '.join(command)}")
    sys.exit(subprocess.run(command, check=False).returncode)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Groom Desk - Pet grooming shop manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    parser_sql = subparsers.add_parser("sql", help="Print the schema SQL")
    parser_sql.set_defaults(func=cmd_sql)

    parser_check = subparsers.add_parser("check", help="Verify the backend schema")
    parser_check.set_defaults(func=cmd_check)

    parser_ui = subparsers.add_parser("ui", help="Launch the Streamlit app")
    parser_ui.add_argument("--port", type=int, help="Server port (default: Streamlit's)")
    parser_ui.set_defaults(func=cmd_ui)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point with CLI argument parsing."""
    configure_logging(load_settings().log_level)
    args = build_parser().parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
