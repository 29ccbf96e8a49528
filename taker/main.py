from __future__ import annotations

import argparse
import json
import logging
import sys

from taker.config import TakerConfig, resolve_config_path, save_taker_config, to_toml

logger = logging.getLogger("taker")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taker-config",
        description="Resolve the taker configuration and print it.",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to taker.toml (default: ./taker.toml, then ~/.coinswap/taker.toml)",
    )
    parser.add_argument("--json", action="store_true", help="Print as JSON instead of TOML")
    parser.add_argument(
        "--write-defaults",
        action="store_true",
        help="Overwrite the resolved config file with the default settings first",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable info logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        if args.write_defaults:
            save_taker_config(resolve_config_path(args.config), TakerConfig())
        config = TakerConfig.new(args.config)
    except OSError as e:
        logger.error("Could not load taker config: %s", e)
        return 1

    if args.json:
        print(json.dumps(config.to_dict(), indent=2))
    else:
        print(to_toml(config), end="")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
