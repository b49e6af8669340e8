"""The Debian source control (.dsc) descriptor."""

import logging
from pathlib import Path
from typing import Any, TextIO

from debian import deb822
from debian.debian_support import Version
from pydantic import BaseModel, ByteSize, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from debsrc.control import DSC_FIELDS, decode_paragraph, encode_paragraph
from debsrc.exceptions import ParseError
from debsrc.models.arch import Arch
from debsrc.models.dependency import Dependency
from debsrc.transfer import abs_files, copy_dsc, move_dsc, remove_dsc

logger = logging.getLogger(__name__)

_HASH_ALGORITHMS = {
    "files": "md5",
    "checksums_sha1": "sha1",
    "checksums_sha256": "sha256",
}


class FileHash(BaseModel):
    """One `<hash> <size> <filename>` line of a Files or Checksums-* field."""

    algorithm: str
    hash: str
    size: ByteSize
    filename: str

    @classmethod
    def parse(cls, line: str, algorithm: str) -> "FileHash":
        try:
            digest, size, filename = line.split()
            return cls(algorithm=algorithm, hash=digest, size=int(size), filename=filename)
        except ValueError as e:
            raise ParseError(f"Invalid {algorithm} file entry: {line!r}") from e

    def __str__(self) -> str:
        return f"{self.hash} {int(self.size)} {self.filename}"


class Dsc(BaseModel):
    """A Debian source control file: the source package, what it builds, and its file set.

    The Debian source control file is generated by dpkg-source when it builds the source
    archive. `filename` is where the .dsc itself lives, and every entry of `files` is relative
    to its directory. `filename` is updated when the descriptor is copied or moved.

    `copy` here copies the files on disk; use `model_copy` for a copy of the model itself.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    filename: Path

    format: str | None = None
    source: str = Field(min_length=1)
    binaries: list[str] = []
    architectures: list[Arch] = []
    version: Version
    origin: str | None = None
    maintainer: str
    uploaders: list[str] = []
    homepage: str | None = None
    standards_version: str | None = None

    build_depends: Dependency = Dependency()
    build_depends_arch: Dependency = Dependency()
    build_depends_indep: Dependency = Dependency()

    checksums_sha1: list[FileHash] = []
    checksums_sha256: list[FileHash] = []
    files: list[FileHash] = []

    raw_control: dict[str, str] | None = Field(default=None, repr=False)

    @field_validator("architectures", mode="before")
    @classmethod
    def _parse_architectures(cls, value: Any) -> Any:
        return [Arch.parse(v) if isinstance(v, str) else v for v in value]

    @field_validator("version", mode="before")
    @classmethod
    def _parse_version(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return Version(value)
            except ValueError as e:
                raise ParseError(f"Invalid version {value!r}: {e}") from e
        return value

    @field_validator("build_depends", "build_depends_arch", "build_depends_indep", mode="before")
    @classmethod
    def _parse_dependency(cls, value: Any) -> Any:
        return Dependency.parse(value) if isinstance(value, str) else value

    @field_validator("files", "checksums_sha1", "checksums_sha256", mode="before")
    @classmethod
    def _parse_hashes(cls, value: Any, info: ValidationInfo) -> Any:
        algorithm = _HASH_ALGORITHMS[info.field_name]
        return [FileHash.parse(v, algorithm) if isinstance(v, str) else v for v in value]

    def has_arch_all(self) -> bool:
        """Check whether this source builds any arch:all binary packages."""
        return any(arch.is_all() for arch in self.architectures)

    def maintainers(self) -> list[str]:
        """Everyone responsible for the package. The Maintainer always comes first, then Uploaders."""
        return [self.maintainer, *self.uploaders]

    def abs_files(self) -> list[FileHash]:
        """Return the Files entries with each filename resolved against the .dsc's directory."""
        return abs_files(self)

    def copy(self, dest: Path | str) -> None:  # type: ignore[override]
        """Copy the .dsc and all its files into `dest`, the .dsc last."""
        copy_dsc(self, Path(dest))

    def move(self, dest: Path | str) -> None:
        """Move the .dsc and all its files into `dest`, the .dsc last."""
        move_dsc(self, Path(dest))

    def remove(self) -> None:
        """Remove the .dsc and all its files, the .dsc last."""
        remove_dsc(self)

    def dump(self) -> str:
        """Render the descriptor back into an (unsigned) control stanza."""
        values = {spec.slot: getattr(self, spec.slot) for spec in DSC_FIELDS}
        return encode_paragraph(values, DSC_FIELDS).dump()


def parse_dsc(text: str | TextIO, path: Path | str) -> Dsc:
    """Parse .dsc contents; `path` is recorded as the descriptor's location.

    PGP armor around a signed .dsc is stripped, the signature is not checked.
    """
    paragraph = deb822.Dsc(text)
    values = decode_paragraph(paragraph, DSC_FIELDS)
    try:
        raw_control = {key: paragraph.get_as_string(key) for key in paragraph}
        return Dsc(filename=Path(path), raw_control=raw_control, **values)
    except ValidationError as e:
        raise ParseError(f"Invalid .dsc {path}: {e}") from e


def parse_dsc_file(path: Path | str) -> Dsc:
    """Read and parse a .dsc from disk. The recorded filename is made absolute."""
    path = Path(path).absolute()
    with path.open(encoding="utf-8") as f:
        dsc = parse_dsc(f, path)
    logger.debug(f"Parsed {dsc.source} {dsc.version} from {path}")
    return dsc

