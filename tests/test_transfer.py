import shutil
from pathlib import Path

import pytest

from debsrc.exceptions import InvalidDestination, IOTransferError
from debsrc.transfer import copy_dsc, move_dsc, remove_dsc, resolve_artifact_path

FILES = {
    "foo_1.0.orig.tar.gz": b"upstream",
    "foo_1.0.orig-extra.tar.gz": b"extra",
    "foo_1.0-1.debian.tar.xz": b"packaging",
}


@pytest.fixture
def foo(write_dsc):
    return write_dsc("foo", files=FILES)


@pytest.fixture
def copy_calls(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, str]]:
    calls: list[tuple[str, str]] = []
    real_copy2 = shutil.copy2

    def _copy2(src, dst):
        calls.append((Path(src).name, dst))
        return real_copy2(src, dst)

    monkeypatch.setattr(shutil, "copy2", _copy2)
    return calls


class TestResolveArtifactPath:
    def test_stays_in_base_dir(self) -> None:
        base = Path("/srv/incoming")
        assert resolve_artifact_path(base, "a.tar.gz") == base / "a.tar.gz"
        assert resolve_artifact_path(base, "/etc/a.tar.gz") == base / "etc" / "a.tar.gz"
        assert resolve_artifact_path(base, "../../a.tar.gz") == base / "a.tar.gz"

    def test_parent_parts_resolved(self) -> None:
        base = Path("/srv")
        assert resolve_artifact_path(base, "sub/../a.tar.gz") == base / "a.tar.gz"
        assert resolve_artifact_path(base, "./sub/./b/../a.tar.gz") == base / "sub" / "a.tar.gz"
        assert resolve_artifact_path(base, "/../etc/a.tar.gz") == base / "etc" / "a.tar.gz"


class TestCopy:
    def test_copy(self, foo, tmp_path: Path, copy_calls) -> None:
        src_dir = foo.filename.parent
        dest = tmp_path / "incoming"
        dest.mkdir()

        foo.copy(dest)

        assert foo.filename == dest / "foo_1.0-1.dsc"
        for name, data in FILES.items():
            assert (dest / name).read_bytes() == data
            assert (src_dir / name).exists()
        assert (src_dir / "foo_1.0-1.dsc").exists()
        assert (dest / "foo_1.0-1.dsc").read_text() == (src_dir / "foo_1.0-1.dsc").read_text()
        # manifest order, .dsc last
        assert [name for name, _ in copy_calls] == [*FILES, "foo_1.0-1.dsc"]

    def test_copy_to_file(self, foo, tmp_path: Path, copy_calls) -> None:
        target = tmp_path / "not-a-dir"
        target.write_text("")
        original = foo.filename

        with pytest.raises(InvalidDestination):
            copy_dsc(foo, target)

        assert copy_calls == []
        assert foo.filename == original

    def test_copy_stops_at_first_failure(self, foo, tmp_path: Path) -> None:
        dest = tmp_path / "incoming"
        dest.mkdir()
        names = list(FILES)
        (foo.filename.parent / names[1]).unlink()
        original = foo.filename

        with pytest.raises(IOTransferError) as excinfo:
            copy_dsc(foo, dest)

        assert excinfo.value.path == foo.filename.parent / names[1]
        assert isinstance(excinfo.value.cause, FileNotFoundError)
        assert (dest / names[0]).exists()
        assert not (dest / names[1]).exists()
        assert not (dest / names[2]).exists()
        assert not (dest / "foo_1.0-1.dsc").exists()
        assert foo.filename == original

    def test_copy_to_missing_dir(self, foo, tmp_path: Path) -> None:
        with pytest.raises(IOTransferError):
            copy_dsc(foo, tmp_path / "missing")

    def test_copy_without_files(self, write_dsc, tmp_path: Path) -> None:
        dsc = write_dsc("bare", files={})
        dest = tmp_path / "incoming"
        dest.mkdir()
        dsc.copy(dest)
        assert sorted(p.name for p in dest.iterdir()) == ["bare_1.0-1.dsc"]


class TestMove:
    def test_move(self, foo, tmp_path: Path) -> None:
        src_dir = foo.filename.parent
        dest = tmp_path / "incoming"
        dest.mkdir()

        foo.move(dest)

        assert foo.filename == dest / "foo_1.0-1.dsc"
        assert sorted(p.name for p in dest.iterdir()) == sorted([*FILES, "foo_1.0-1.dsc"])
        assert list(src_dir.iterdir()) == []
        assert [Path(f.filename).parent for f in foo.abs_files()] == [dest] * len(FILES)

    def test_move_to_file(self, foo, tmp_path: Path) -> None:
        target = tmp_path / "not-a-dir"
        target.write_text("")
        with pytest.raises(InvalidDestination):
            move_dsc(foo, target)
        assert all(Path(f.filename).exists() for f in foo.abs_files())

    def test_move_stops_at_first_failure(self, foo, tmp_path: Path) -> None:
        src_dir = foo.filename.parent
        dest = tmp_path / "incoming"
        dest.mkdir()
        names = list(FILES)
        (src_dir / names[2]).unlink()

        with pytest.raises(IOTransferError):
            move_dsc(foo, dest)

        assert sorted(p.name for p in dest.iterdir()) == sorted(names[:2])
        assert (src_dir / "foo_1.0-1.dsc").exists()
        assert foo.filename == src_dir / "foo_1.0-1.dsc"


class TestRemove:
    def test_remove(self, foo) -> None:
        src_dir = foo.filename.parent
        foo.remove()
        assert list(src_dir.iterdir()) == []

    def test_remove_stops_at_first_failure(self, foo) -> None:
        src_dir = foo.filename.parent
        names = list(FILES)
        (src_dir / names[1]).unlink()

        with pytest.raises(IOTransferError) as excinfo:
            remove_dsc(foo)

        assert excinfo.value.path == src_dir / names[1]
        assert not (src_dir / names[0]).exists()
        assert (src_dir / names[2]).exists()
        assert foo.filename.exists()
