#!/usr/bin/env python3
"""Main entrypoint for the ace-tool uploader configuration check."""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any, cast

from rich.console import Console
from rich.logging import RichHandler

from ace_uploader.errors import ConfigError
from ace_uploader.settings import Config, ConfigStore, parse_config_args
from ace_uploader.strategy import UploadStrategy, select_upload_strategy


class Args(argparse.Namespace):
    log_level: str
    rich_logs: bool
    blob_count: int | None
    print_config_and_exit: bool


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(name)s:%(filename)s:%(lineno)d] %(levelname)s: %(message)s"


def parse_args(argv: Sequence[str]) -> Args:
    """Parse the command line options of the entrypoint itself.

    Expects the arguments ``parse_config_args`` left over, so values of the
    upload settings are never read as options here. Unknown arguments are
    not an error.
    """
    parser = argparse.ArgumentParser(
        description="ace-tool uploader configuration",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        allow_abbrev=False,
        epilog="Upload settings: --base-url URL (required), --token TOKEN "
        "(required), --enable-log (MCP host logging, used by the uploader)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set the logging level",
    )

    parser.add_argument(
        "--rich-logs",
        action="store_true",
        help="Enable rich colored logging output",
    )

    parser.add_argument(
        "--blob-count",
        type=int,
        help="Number of blobs in the project, resolves the upload strategy",
    )

    parser.add_argument(
        "--print-config-and-exit",
        action="store_true",
        help="Print the resolved configuration as JSON and exit",
    )

    args, _ = parser.parse_known_args(argv)
    return cast(Args, args)


def configure_logging(log_level: str, use_rich: bool = False) -> None:
    """Configure logging with optional rich formatting.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        use_rich: Whether to use rich colored logging
    """
    if use_rich:
        logging.basicConfig(
            level=getattr(logging, log_level),
            format="%(message)s",
            datefmt="[%X]",
            handlers=[
                RichHandler(
                    console=Console(stderr=True),
                    show_path=True,
                    show_time=True,
                    show_level=True,
                    markup=True,
                    rich_tracebacks=True,
                )
            ],
        )
    else:
        logging.basicConfig(level=getattr(logging, log_level), format=LOG_FORMAT)

    # silence libs logging
    logging.getLogger("mcp").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def describe_config(
    config: Config, strategy: UploadStrategy | None = None
) -> dict[str, Any]:
    """Return a JSON serializable view of the configuration, token masked."""
    described = config.model_dump()
    described["token"] = "****"
    described["text_extensions"] = sorted(config.text_extensions)
    described["exclude_patterns"] = list(config.exclude_patterns)
    if strategy is not None:
        described["upload_strategy"] = strategy.model_dump()
    return described


def main(argv: Sequence[str] | None = None) -> int:
    """Main function."""
    if argv is None:
        argv = sys.argv[1:]
    args = parse_args(parse_config_args(argv).remaining)

    configure_logging(args.log_level, args.rich_logs)

    try:
        config = ConfigStore().init(argv)

        strategy = None
        if args.blob_count is not None:
            strategy = select_upload_strategy(args.blob_count)
            logger.info(
                "Project scale: %s (%d blobs), batch size %d, concurrency %d, timeout %d ms",
                strategy.scale_name,
                args.blob_count,
                strategy.batch_size,
                strategy.concurrency,
                strategy.timeout,
            )

        if args.print_config_and_exit:
            logger.info("Printing resolved configuration")
            print(
                json.dumps(describe_config(config, strategy), indent=2, sort_keys=True)
            )
            return 0

    except ConfigError as e:
        logger.error("Invalid config: %s", e)
        return 1
    except Exception as e:
        logger.error("Error resolving configuration: %s", e, exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
