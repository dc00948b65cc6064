"""Command line entry point.

    python -m sungrow fetch power --config sungrow.json
    python -m sungrow serve --config sungrow.json --broker localhost
"""

import argparse
import asyncio
import json
import logging
import sys

from .client import SunGrow
from .config import load_config
from .exceptions import SunGrowEmptyResultError, SunGrowError
from .mqtt import DEFAULT_PREFIX, BridgeMQTT

logger = logging.getLogger(__name__)

FETCHERS = {
    "details": "get_station_details",
    "power": "get_power_flow",
    "day": "get_day_energy",
    "overview": "get_overview",
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sungrow", description="iSolarCloud power-flow client")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = p.add_subparsers(dest="command", required=True)

    fetch_args = subparsers.add_parser("fetch", help="Fetch one data category and print it as JSON")
    fetch_args.add_argument("category", choices=sorted(FETCHERS))
    fetch_args.add_argument("--config", required=True, help="Path to JSON config file")

    serve_args = subparsers.add_parser("serve", help="Serve the notification bridge over MQTT")
    serve_args.add_argument("--config", default=None, help="Path to JSON config file")
    serve_args.add_argument("--broker", required=True, help="MQTT broker hostname")
    serve_args.add_argument("--port", type=int, default=1883, help="MQTT broker port [Default=1883]")
    serve_args.add_argument("--prefix", default=DEFAULT_PREFIX, help=f"Topic prefix [Default={DEFAULT_PREFIX}]")
    serve_args.add_argument("--username", default=None, help="MQTT username")
    serve_args.add_argument("--password", default=None, help="MQTT password")
    return p


async def _fetch(category: str, config_path: str) -> int:
    api = SunGrow(load_config(config_path))
    try:
        result = await getattr(api, FETCHERS[category])()
    except SunGrowEmptyResultError as e:
        logger.warning("No data: %s", e)
        return 2
    print(json.dumps(result.to_payload(), indent=2))
    return 0


async def _serve(args: argparse.Namespace) -> int:
    config = load_config(args.config) if args.config else None
    host = BridgeMQTT(
        args.broker,
        port=args.port,
        prefix=args.prefix,
        username=args.username,
        password=args.password,
        config=config,
    )
    await host.listen()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.command == "fetch":
            return asyncio.run(_fetch(args.category, args.config))
        return asyncio.run(_serve(args))
    except SunGrowError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
