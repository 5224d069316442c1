import argparse
import json
import logging
import os
import sys

from .config import (
    get_sentry_config,
    load_config_from_toml,
    setup_package_logger,
)
from .helper import ViteHelper
from .host import InMemoryAssetHost
from .models import AssetType, ViteHelperError

logger = logging.getLogger(__name__)


def setup_sentry():
    try:
        import sentry_sdk

        sentry_config: dict[str, str] = get_sentry_config()
        if sentry_config.get("dsn"):
            sentry_sdk.init(
                dsn=sentry_config["dsn"],
                environment=sentry_config["environment"],
                release=sentry_config["release"],
                traces_sample_rate=1.0,
            )
    except ImportError:
        logger.warning("Sentry SDK not found. Skipping Sentry setup.")
    except Exception as e:
        logger.error("Failed to initialize Sentry: %s", e)


def resolve_assets(helper: ViteHelper, entry_id: str) -> dict:
    """Get the asset URLs an entry would load with right now."""
    live = helper.is_dev_server_live()
    if live:
        return {
            "mode": helper.config.output_mode.value,
            "live": True,
            "script": helper.dev_url(entry_id),
            "vite_client": helper.config.vite_client_url,
            # Vite injects CSS itself in dev mode
            "styles": [],
        }
    return {
        "mode": helper.config.output_mode.value,
        "live": False,
        "script": helper.resolve_url(entry_id, AssetType.SCRIPT),
        "styles": helper.resolve_all_styles(entry_id),
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vitehelper")
    parser.add_argument(
        "--config-file", type=str, default="vitehelper.toml", help="Path to config file"
    )
    parser.add_argument("--log-file", type=str, default="", help="Path to log file")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Log level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    resolve = subparsers.add_parser("resolve", help="Print the asset URLs for an entry")
    resolve.add_argument("entry", help="Vite entry, e.g. src/main.js")
    subparsers.add_parser("probe", help="Check whether the dev server is live")
    subparsers.add_parser("check", help="Validate the build manifest")
    return parser


def main(argv: list[str] | None = None) -> int:
    setup_sentry()
    args = build_parser().parse_args(argv)
    setup_package_logger(args.log_level, args.log_file if args.log_file else None)

    if not os.path.exists(args.config_file):
        logger.error("Config file %s not found", args.config_file)
        return 2

    try:
        config = load_config_from_toml(args.config_file)
    except ViteHelperError as e:
        logger.error("Invalid config file %s: %s", args.config_file, e)
        return 2

    helper = ViteHelper(config, InMemoryAssetHost())

    if args.command == "probe":
        live = helper.is_dev_server_live()
        print("live" if live else "down")
        return 0 if live else 1

    if args.command == "check":
        try:
            manifest = helper.manifest_reader.load()
        except ViteHelperError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if manifest is None:
            print(f"Error: manifest {config.manifest_path} not found", file=sys.stderr)
            return 1
        print(f"{config.manifest_path}: {len(manifest)} entries")
        return 0

    print(json.dumps(resolve_assets(helper, args.entry)))
    return 0
