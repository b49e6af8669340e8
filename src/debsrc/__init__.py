"""debsrc: Debian source package descriptors, build ordering and file-set transfer."""

import logging

from rich.logging import RichHandler

from .constants import LOG_LEVEL
from .exceptions import (
    CycleDetected,
    DebsrcError,
    DependencyResolutionError,
    InvalidDestination,
    IOTransferError,
    ParseError,
)
from .models import Dsc, parse_dsc, parse_dsc_file
from .order import order_dsc_for_build

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            rich_tracebacks=True,
        )
    ],
)

__all__ = [
    "CycleDetected",
    "DebsrcError",
    "DependencyResolutionError",
    "Dsc",
    "IOTransferError",
    "InvalidDestination",
    "ParseError",
    "order_dsc_for_build",
    "parse_dsc",
    "parse_dsc_file",
]
