"""Uploader configuration derived from command line arguments.

Only three arguments are recognized: ``--base-url <value>``, ``--token <value>``
and ``--enable-log``. Everything else on the command line is ignored, so the
same argument list can be shared with other consumers.
"""

import logging
from collections.abc import Sequence
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from ace_uploader import constants
from ace_uploader.errors import (
    AlreadyInitializedError,
    MissingArgumentError,
    NotInitializedError,
)

logger = logging.getLogger(__name__)


class Config(BaseModel):
    """Uploader settings, immutable once created."""

    model_config = ConfigDict(frozen=True)

    # Required settings
    base_url: str
    token: str = Field(min_length=1)

    # Fixed settings
    batch_size: PositiveInt = constants.BATCH_SIZE
    max_lines_per_blob: PositiveInt = constants.MAX_LINES_PER_BLOB
    text_extensions: frozenset[str] = constants.DEFAULT_TEXT_EXTENSIONS
    exclude_patterns: tuple[str, ...] = constants.DEFAULT_EXCLUDE_PATTERNS
    enable_log: bool = False

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, value: str) -> str:
        """Default the scheme to https and strip one trailing slash."""
        if not value.startswith(("http://", "https://")):
            value = f"https://{value}"
        return value.removesuffix("/")


class ConfigArgs(NamedTuple):
    base_url: str | None = None
    token: str | None = None
    enable_log: bool = False
    remaining: tuple[str, ...] = ()  # arguments left for other consumers


def parse_config_args(argv: Sequence[str]) -> ConfigArgs:
    """Scan the argument list for the configuration flags.

    Flags are matched exactly. A flag taking a value consumes the next
    token whatever it looks like, so ``--token --enable-log`` sets the token
    to ``"--enable-log"``. A value flag in the last position is ignored.

    Args:
        argv: Command line arguments without the program name.

    Returns:
        The recognized values, None for flags that were not given, and the
        arguments the scan did not consume.
    """
    base_url: str | None = None
    token: str | None = None
    enable_log = False
    remaining: list[str] = []

    args = iter(argv)
    for arg in args:
        if arg in ("--base-url", "--token"):
            value = next(args, None)
            if value is None:
                remaining.append(arg)
            elif arg == "--base-url":
                base_url = value
            else:
                token = value
        elif arg == "--enable-log":
            enable_log = True
        else:
            remaining.append(arg)

    return ConfigArgs(
        base_url=base_url,
        token=token,
        enable_log=enable_log,
        remaining=tuple(remaining),
    )


def load_config(argv: Sequence[str]) -> Config:
    """Build the configuration from command line arguments.

    Args:
        argv: Command line arguments without the program name.

    Returns:
        Config with the normalized base URL and the default file tables.

    Raises:
        MissingArgumentError: If ``--base-url`` or ``--token`` is missing.
    """
    args = parse_config_args(argv)

    if not args.base_url:
        raise MissingArgumentError("--base-url")

    if not args.token:
        raise MissingArgumentError("--token")

    return Config(
        base_url=args.base_url,
        token=args.token,
        enable_log=args.enable_log,
    )


class ConfigStore:
    """Holds the configuration of a running uploader.

    The store is created once at process entry and handed to every component
    that needs the configuration. It accepts a single successful ``init``.
    """

    def __init__(self) -> None:
        self._config: Config | None = None

    @property
    def initialized(self) -> bool:
        return self._config is not None

    def init(self, argv: Sequence[str]) -> Config:
        """Load and store the configuration.

        Args:
            argv: Command line arguments without the program name.

        Returns:
            The stored configuration.

        Raises:
            AlreadyInitializedError: If a configuration is already stored.
            MissingArgumentError: If a required argument is missing.
        """
        if self._config is not None:
            raise AlreadyInitializedError()

        config = load_config(argv)
        self._config = config

        logger.info("Upload endpoint: %s", config.base_url)
        logger.info("MCP logging %s", "enabled" if config.enable_log else "disabled")
        return config

    def get(self) -> Config:
        """Return the stored configuration.

        Raises:
            NotInitializedError: If ``init`` has not succeeded yet.
        """
        if self._config is None:
            raise NotInitializedError()
        return self._config
