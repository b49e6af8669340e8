"""Debian architecture triples and architecture restriction lists."""

from pydantic import BaseModel, ConfigDict

from debsrc.exceptions import ParseError

ANY = "any"
ALL = "all"


class Arch(BaseModel):
    """An (ABI, OS, CPU) build target. `any` in a slot is a wildcard, `all` everywhere is arch:all."""

    model_config = ConfigDict(frozen=True)

    abi: str
    os: str
    cpu: str

    @classmethod
    def parse(cls, text: str) -> "Arch":
        """Parse a Debian architecture name or wildcard.

        Examples:
            >>> Arch.parse("amd64")
            Arch(abi='gnu', os='linux', cpu='amd64')
            >>> Arch.parse("linux-any")
            Arch(abi='any', os='linux', cpu='any')
        """
        text = text.strip()
        if text in (ALL, ANY):
            return cls(abi=text, os=text, cpu=text)

        parts = text.split("-")
        if not text or len(parts) > 3 or not all(parts):
            raise ParseError(f"Invalid architecture: {text!r}")

        match parts:
            case [cpu]:
                return cls(abi="gnu", os="linux", cpu=cpu)
            case [os_name, cpu]:
                return cls(abi=ANY, os=os_name, cpu=cpu)
            case [abi, os_name, cpu]:
                return cls(abi=abi, os=os_name, cpu=cpu)

    def is_all(self) -> bool:
        return self.abi == ALL and self.os == ALL and self.cpu == ALL

    def matches(self, other: "Arch") -> bool:
        """True if every slot is equal or a wildcard on either side."""
        return all(
            mine == theirs or ANY in (mine, theirs)
            for mine, theirs in ((self.abi, other.abi), (self.os, other.os), (self.cpu, other.cpu))
        )

    def __str__(self) -> str:
        if self.abi == self.os == self.cpu and self.abi in (ALL, ANY):
            return self.abi
        if self.abi == "gnu" and self.os == "linux":
            return self.cpu
        if self.abi == ANY:
            return f"{self.os}-{self.cpu}"
        return f"{self.abi}-{self.os}-{self.cpu}"


class ArchRestriction(BaseModel):
    """One entry of a `[amd64 !i386]` style restriction list."""

    model_config = ConfigDict(frozen=True)

    enabled: bool
    arch: Arch

    def __str__(self) -> str:
        return str(self.arch) if self.enabled else f"!{self.arch}"


def arch_set_matches(restrictions: list[ArchRestriction], arch: Arch) -> bool:
    """Check whether a restriction list admits `arch`.

    An empty list admits everything. A list of negations admits anything none of them match,
    otherwise at least one positive entry has to match.
    """
    if not restrictions:
        return True
    if all(not r.enabled for r in restrictions):
        return not any(r.arch.matches(arch) for r in restrictions)
    return any(r.arch.matches(arch) for r in restrictions if r.enabled)
