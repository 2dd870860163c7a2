import os
import pathlib
import stat

import helpers
import pytest

import pyversion

MARKER_VARIANTS = [
    'version = "1.2.3"',
    "version = '1.2.3'",
    'version="1.2.3"',
    'version  =\t"1.2.3"',
]


@pytest.mark.parametrize("marker", MARKER_VARIANTS)
def test_locate_and_substitute_keep_syntax(marker: str) -> None:
    content = f"[project]\nname = \"x\"\n{marker}\n"
    m = pyversion.locate(content)
    assert str(m.version) == "1.2.3"
    assert content[m.span[0] : m.span[1]] == "1.2.3"

    new_content = pyversion.substitute(content, m, pyversion.parse("1.3.0"))
    assert new_content == content.replace("1.2.3", "1.3.0")


def test_locate_first_marker_wins() -> None:
    content = 'version = "1.0.0"\n[tool.x]\nversion = "9.9.9"\n'
    m = pyversion.locate(content)
    assert str(m.version) == "1.0.0"


def test_locate_not_found() -> None:
    with pytest.raises(pyversion.VersionNotFoundError, match="version not found in"):
        pyversion.locate('name = "x"\nversion = "1.0"\n')


def test_substitute_first_only_by_default() -> None:
    content = 'version = "1.0.0"\n[tool.x]\nversion = \'5.0.0\'\n'
    m = pyversion.locate(content)
    new_content = pyversion.substitute(content, m, pyversion.parse("1.0.1"))
    assert new_content == 'version = "1.0.1"\n[tool.x]\nversion = \'5.0.0\'\n'


def test_substitute_replace_all() -> None:
    content = 'version = "1.0.0"\n[tool.x]\nversion = \'5.0.0\'\n'
    m = pyversion.locate(content)
    new_content = pyversion.substitute(
        content, m, pyversion.parse("1.0.1"), replace_all=True
    )
    assert new_content == 'version = "1.0.1"\n[tool.x]\nversion = \'1.0.1\'\n'


def test_show_leaves_file_unchanged(tmp_path: pathlib.Path) -> None:
    content = 'name = "x"\nversion = "2.0.0"\n'
    path = helpers.write_file(tmp_path, content)
    assert str(pyversion.show_file(path)) == "2.0.0"
    assert helpers.read_file(path) == content


def test_update_file_end_to_end(tmp_path: pathlib.Path) -> None:
    path = helpers.write_file(tmp_path, helpers.PYPROJECT_CONTENT)
    op = pyversion.make_operation("increment", "major")
    old, new = pyversion.update_file(path, op)
    assert (str(old), str(new)) == ("1.0.0", "2.0.0")
    assert helpers.read_file(path) == 'name = "x"\nversion = "2.0.0"\n'


def test_update_file_keeps_crlf(tmp_path: pathlib.Path) -> None:
    path = helpers.write_file(tmp_path, 'name = "x"\r\nversion = "1.0.0"\r\n')
    pyversion.update_file(path, pyversion.make_operation("increment", "patch"))
    assert helpers.read_file(path) == 'name = "x"\r\nversion = "1.0.1"\r\n'


@pytest.mark.parametrize("atomic", [True, False])
def test_update_file_no_marker_unchanged(tmp_path: pathlib.Path, atomic: bool) -> None:
    content = 'name = "x"\n'
    path = helpers.write_file(tmp_path, content)
    with pytest.raises(pyversion.VersionNotFoundError):
        pyversion.update_file(
            path, pyversion.make_operation("increment", "patch"), atomic=atomic
        )
    assert helpers.read_file(path) == content


def test_update_file_missing(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "missing.toml"
    with pytest.raises(pyversion.VersionFileNotFoundError) as exc_info:
        pyversion.update_file(path, pyversion.make_operation("increment", "patch"))
    assert exc_info.value.path == str(path)
    assert isinstance(exc_info.value.cause, FileNotFoundError)


def test_read_content_not_utf8(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_bytes(b'version = "1.0.0"\n\xff\xfe\n')
    with pytest.raises(pyversion.FileReadError):
        pyversion.read_content(path)


def test_atomic_write_keeps_mode_and_no_leftovers(tmp_path: pathlib.Path) -> None:
    path = helpers.write_file(tmp_path, helpers.PYPROJECT_CONTENT)
    os.chmod(path, 0o640)
    pyversion.update_file(path, pyversion.make_operation("set", "minor", 4))
    assert helpers.read_file(path) == 'name = "x"\nversion = "1.4.0"\n'
    assert stat.S_IMODE(path.stat().st_mode) == 0o640
    assert sorted(p.name for p in tmp_path.iterdir()) == ["pyproject.toml"]


def test_write_content_failure(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "no_such_dir" / "pyproject.toml"
    with pytest.raises(pyversion.FileWriteError, match="failed to write to file"):
        pyversion.write_content(path, "version = '1.0.0'\n")


@pytest.mark.parametrize("atomic", [True, False])
def test_update_file_through_symlink(tmp_path: pathlib.Path, atomic: bool) -> None:
    real = helpers.write_file(tmp_path, helpers.PYPROJECT_CONTENT, fname="real.toml")
    link = tmp_path / "pyproject.toml"
    link.symlink_to(real)
    pyversion.update_file(
        link, pyversion.make_operation("increment", "patch"), atomic=atomic
    )
    assert link.is_symlink()
    assert os.readlink(link) == str(real)
    assert helpers.read_file(real) == 'name = "x"\nversion = "1.0.1"\n'
    assert sorted(p.name for p in tmp_path.iterdir()) == ["pyproject.toml", "real.toml"]


def test_write_content_in_place(tmp_path: pathlib.Path) -> None:
    path = helpers.write_file(tmp_path, helpers.PYPROJECT_CONTENT)
    inode = path.stat().st_ino
    pyversion.write_content(path, 'version = "3.0.0"\n', atomic=False)
    assert helpers.read_file(path) == 'version = "3.0.0"\n'
    assert path.stat().st_ino == inode
