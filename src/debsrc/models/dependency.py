"""Build dependency expressions, parsed with python-debian's PkgRelation."""

import logging
import re
import warnings

from debian.deb822 import PkgRelation
from pydantic import BaseModel

from debsrc.exceptions import DependencyResolutionError, ParseError
from debsrc.models.arch import Arch, ArchRestriction, arch_set_matches

logger = logging.getLogger(__name__)

_SUBSTVAR_RE = re.compile(r"\$\{[^}]+\}")
_PACKAGE_NAME_RE = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9.+\-]*")


class Possibility(BaseModel):
    """A single alternative of a relation, e.g. `libfoo-dev (>= 1.2) [amd64]`."""

    name: str
    archqual: str | None = None
    version: tuple[str | None, str | None] | None = None
    architectures: list[ArchRestriction] = []


class Relation(BaseModel):
    """A `|`-separated group of alternatives; any one of them satisfies the relation."""

    possibilities: list[Possibility] = []


class Dependency(BaseModel):
    """A full dependency field such as Build-Depends."""

    raw: str = ""
    relations: list[Relation] = []

    @classmethod
    def parse(cls, text: str) -> "Dependency":
        """Parse a dependency expression.

        Substitution variables and empty entries (trailing commas) are dropped, they never name
        a package that could be built in the same batch.
        """
        entries = [entry.strip() for entry in text.split(",")]
        entries = [entry for entry in entries if entry and not _SUBSTVAR_RE.fullmatch(entry)]
        if not entries:
            return cls(raw=text.strip())

        # python-debian warns and hands back the raw text as the name when it cannot parse an entry
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            parsed = PkgRelation.parse_relations(", ".join(entries))

        relations = []
        for alternatives in parsed:
            possibilities = []
            for alt in alternatives:
                if _SUBSTVAR_RE.fullmatch(alt["name"].strip()):
                    continue
                if not _PACKAGE_NAME_RE.fullmatch(alt["name"]):
                    raise DependencyResolutionError(f"Cannot parse dependency {text!r} near {alt['name']!r}")
                try:
                    archs = [ArchRestriction(enabled=a.enabled, arch=Arch.parse(a.arch)) for a in alt["arch"] or []]
                except ParseError as e:
                    raise DependencyResolutionError(f"Bad architecture restriction in {text!r}: {e}") from e
                possibilities.append(
                    Possibility(
                        name=alt["name"],
                        archqual=alt.get("archqual"),
                        version=alt["version"],
                        architectures=archs,
                    )
                )
            if possibilities:
                relations.append(Relation(possibilities=possibilities))
        return cls(raw=text.strip(), relations=relations)

    def get_possibilities(self, arch: Arch) -> list[Possibility]:
        """Return the first alternative of each relation that applies to `arch`."""
        ret = []
        for relation in self.relations:
            for possibility in relation.possibilities:
                if arch_set_matches(possibility.architectures, arch):
                    ret.append(possibility)
                    break
            else:
                logger.debug(f"No alternative of {relation} applies to {arch}")
        return ret

    def __str__(self) -> str:
        return self.raw
