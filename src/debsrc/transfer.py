"""Copying, moving and removing a .dsc together with every file it references.

The .dsc is always transferred last (and removed last), so something watching the destination
for new .dsc files (an inotify hook on an incoming directory, say) only sees a descriptor once
all of its files are already in place. Failures abort immediately and are not rolled back:
whatever was transferred before the failing file stays where it is.
"""

import logging
import os
import posixpath
import shutil
from collections.abc import Callable
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from debsrc.exceptions import InvalidDestination, IOTransferError

if TYPE_CHECKING:
    from debsrc.models.dsc import Dsc, FileHash

logger = logging.getLogger(__name__)


def resolve_artifact_path(base_dir: Path, filename: str) -> Path:
    """Join a Files entry onto the .dsc directory, never leaving that directory.

    Examples:
        >>> resolve_artifact_path(Path("/srv/incoming"), "../foo_1.0.orig.tar.gz")
        PosixPath('/srv/incoming/foo_1.0.orig.tar.gz')
        >>> resolve_artifact_path(Path("/srv/incoming"), "sub/../foo_1.0.orig.tar.gz")
        PosixPath('/srv/incoming/foo_1.0.orig.tar.gz')
    """
    parts = [part for part in PurePosixPath(posixpath.normpath(filename)).parts if part not in ("/", ".", "..")]
    return base_dir.joinpath(*parts)


def abs_files(dsc: "Dsc") -> list["FileHash"]:
    """Return copies of `dsc.files` whose filenames are absolute paths next to the .dsc."""
    base_dir = dsc.filename.parent
    return [
        file_hash.model_copy(update={"filename": str(resolve_artifact_path(base_dir, file_hash.filename))})
        for file_hash in dsc.files
    ]


def _check_dest(dest: Path) -> None:
    if dest.exists() and not dest.is_dir():
        raise InvalidDestination(dest)


def _transfer(dsc: "Dsc", dest: Path, op: Callable[[str, str], object], verb: str) -> None:
    _check_dest(dest)

    for file_hash in abs_files(dsc):
        src = Path(file_hash.filename)
        try:
            op(str(src), str(dest / src.name))
        except OSError as e:
            raise IOTransferError(src, e) from e
        logger.debug(f"{verb} {src} -> {dest}")

    target = dest / dsc.filename.name
    try:
        op(str(dsc.filename), str(target))
    except OSError as e:
        raise IOTransferError(dsc.filename, e) from e

    logger.info(f"{verb} {dsc.source} ({len(dsc.files)} files) to {dest}")
    dsc.filename = target


def copy_dsc(dsc: "Dsc", dest: Path) -> None:
    """Copy the .dsc and all referenced files into the directory `dest`.

    On success `dsc.filename` points at the copy.

    Raises:
        InvalidDestination: `dest` exists and is not a directory, nothing was copied
        IOTransferError: copying one of the files failed, the .dsc itself was not copied
    """
    _transfer(dsc, dest, shutil.copy2, "Copied")


def move_dsc(dsc: "Dsc", dest: Path) -> None:
    """Move the .dsc and all referenced files into the directory `dest`.

    Same contract as copy_dsc, except that no original survives a successful move.
    """
    _transfer(dsc, dest, shutil.move, "Moved")


def remove_dsc(dsc: "Dsc") -> None:
    """Remove every referenced file, then the .dsc.

    Raises:
        IOTransferError: removing one of the files failed, the .dsc is still in place
    """
    for path in [Path(f.filename) for f in abs_files(dsc)] + [dsc.filename]:
        try:
            os.remove(path)
        except OSError as e:
            raise IOTransferError(path, e) from e
        logger.debug(f"Removed {path}")
    logger.info(f"Removed {dsc.source} ({len(dsc.files)} files) from {dsc.filename.parent}")
