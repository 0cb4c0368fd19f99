"""Start the campus transit portal web server."""

from __future__ import annotations

import argparse
import logging

from campus_transit.config import load_config
from campus_transit.data.backend_client import BackendClient
from campus_transit.data.change_feed import ChangeFeed
from campus_transit.log import configure_logging
from campus_transit.web import Portal, run_server

logger = logging.getLogger("campus_transit.serve")


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Path to the YAML config file",
    )
    parser.add_argument("--host", help="Override the configured bind host")
    parser.add_argument("--port", type=int, help="Override the configured port")
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ValueError as exc:
        raise SystemExit(f"Startup failed: {exc}") from exc

    configure_logging(config.log)

    client = BackendClient(
        config.backend.url,
        config.backend.api_key,
        timeout_seconds=config.backend.request_timeout_seconds,
    )
    feed = ChangeFeed(client, config.backend.change_poll_interval_seconds)
    portal = Portal(client, feed, config.server.default_semester)

    run_server(portal, args.host or config.server.host, args.port or config.server.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
