"""Shared fixtures: write .dsc files and their artifacts into a temp directory."""

import hashlib
from pathlib import Path

import pytest

from debsrc.models import Dsc, parse_dsc_file


def dsc_text(
    source: str,
    binaries: list[str] | None = None,
    build_depends: str | None = None,
    files: dict[str, bytes] | None = None,
    architecture: str = "any",
    extra: str = "",
) -> str:
    binaries = binaries if binaries is not None else [source]
    lines = [
        "Format: 3.0 (quilt)",
        f"Source: {source}",
        f"Binary: {', '.join(binaries)}",
        f"Architecture: {architecture}",
        "Version: 1.0-1",
        "Maintainer: Jane Doe <jane@example.org>",
        "Uploaders: Bob <bob@example.org>, Carl <carl@example.org>",
        "Standards-Version: 4.6.2",
    ]
    if build_depends:
        lines.append(f"Build-Depends: {build_depends}")
    if extra:
        lines.append(extra.rstrip("\n"))
    if files:
        lines.append("Checksums-Sha256:")
        lines.extend(f" {hashlib.sha256(data).hexdigest()} {len(data)} {name}" for name, data in files.items())
        lines.append("Files:")
        lines.extend(f" {hashlib.md5(data).hexdigest()} {len(data)} {name}" for name, data in files.items())
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_dsc(tmp_path: Path):
    """Write a .dsc plus the files it lists and parse it back."""

    def _write(source: str, directory: Path | None = None, files: dict[str, bytes] | None = None, **kwargs) -> Dsc:
        directory = directory or tmp_path / "pool"
        directory.mkdir(parents=True, exist_ok=True)
        if files is None:
            files = {
                f"{source}_1.0.orig.tar.gz": f"{source} upstream".encode(),
                f"{source}_1.0-1.debian.tar.xz": f"{source} packaging".encode(),
            }
        for name, data in files.items():
            (directory / name).write_bytes(data)
        path = directory / f"{source}_1.0-1.dsc"
        path.write_text(dsc_text(source, files=files, **kwargs))
        return parse_dsc_file(path)

    return _write
