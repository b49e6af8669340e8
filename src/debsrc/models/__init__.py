"""Expose descriptor models."""

from .arch import Arch, ArchRestriction
from .dependency import Dependency, Possibility, Relation
from .dsc import Dsc, FileHash, parse_dsc, parse_dsc_file

__all__ = [
    "Arch",
    "ArchRestriction",
    "Dependency",
    "Dsc",
    "FileHash",
    "Possibility",
    "Relation",
    "parse_dsc",
    "parse_dsc_file",
]
