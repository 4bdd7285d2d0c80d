"""
TinyWiki command line entry point.

Usage:
    # Serve ./data/pages on 127.0.0.1:8080
    tinywiki

    # Serve another directory on all interfaces
    tinywiki --host 0.0.0.0 --port 9000 --data-dir /srv/wiki

Settings not given on the command line come from TINYWIKI_* environment
variables or a .env file.
"""

import argparse
import logging
from pathlib import Path

import uvicorn

from tinywiki.config import Settings
from tinywiki.core.errors import StorageError, TemplateSetupError
from tinywiki.main import create_app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinywiki",
        description="Serve a file-backed wiki over HTTP.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--host", help="listen address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, help="listen port (default: 8080)")
    parser.add_argument(
        "--data-dir", type=Path, help="directory holding <title>.txt page files"
    )
    parser.add_argument(
        "--debug", action="store_true", default=None, help="enable debug logging"
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Merge command line overrides on top of environment settings."""
    overrides = {
        "host": args.host,
        "port": args.port,
        "data_dir": args.data_dir,
        "debug": args.debug,
    }
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_settings(args)
    log_level = "debug" if config.debug else "info"
    logging.basicConfig(
        level=log_level.upper(),
        format="%(levelname)s:     %(name)s - %(message)s",
    )

    try:
        app = create_app(config)
    except (TemplateSetupError, StorageError) as exc:
        logger.critical("Cannot start %s: %s", config.app_title, exc)
        return 1

    uvicorn.run(app, host=config.host, port=config.port, log_level=log_level)
    return 0
