"""CLI entry point: run the API server or a one-off scrape."""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

import uvicorn

from fightdata.api import create_app
from fightdata.config import Settings, is_valid_port, load_config
from fightdata.scraper import FightParser
from fightdata.util import ConfigError, FightdataError

logger = logging.getLogger("fightdata")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fightdata",
        description="Scrape fight results and serve them as JSON.",
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="Path to config.yaml (default: search ., ./config, ~/.fightdata)",
    )
    parser.add_argument(
        "--log-level", choices=["INFO", "DEBUG"], default="INFO",
        help="Logging level (default: INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None, help="Bind address (overrides config)")
    serve.add_argument("--port", default=None, help="Port (overrides config)")

    scrape = sub.add_parser("scrape", help="Scrape once and print JSON to stdout")
    scrape.add_argument("--url", default=None, help="Results page URL (overrides config)")
    return parser


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


def _serve(settings: Settings, host: str | None, port: str | None) -> None:
    host = host or settings.server.host
    if port and not is_valid_port(port):
        raise ConfigError(f"invalid server port format: {port}")
    port_number = int(port.lstrip(":")) if port else settings.server.port_number

    logger.info("Server starting on %s:%d", host, port_number)
    logger.info("API endpoints available at: http://localhost:%d/api/", port_number)
    logger.info("Web interface available at: http://localhost:%d/", port_number)

    # uvicorn installs SIGINT/SIGTERM handlers and shuts down gracefully
    uvicorn.run(create_app(settings), host=host, port=port_number, log_config=None)
    logger.info("Shutdown complete")


def _scrape(settings: Settings, url: str | None) -> None:
    url = url or settings.parser.base_url
    start_time = time.time()

    records = FightParser(url, settings.parser).parse_fights()
    json.dump([r.to_dict() for r in records], sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")

    logger.info("=== Summary ===")
    logger.info("Source: %s", url)
    logger.info("Fights: %d", len(records))
    logger.info("Elapsed: %.1fs", time.time() - start_time)


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.log_level)

    try:
        settings = load_config(args.config)
        if args.command == "serve":
            _serve(settings, args.host, args.port)
        else:
            _scrape(settings, args.url)
    except FightdataError as e:
        logger.error("Fatal error: %s", e)
        sys.exit(1)
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
