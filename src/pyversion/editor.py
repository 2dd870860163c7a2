import logging
import os
import pathlib
import re
import stat
import tempfile
from typing import NamedTuple, Union

from . import errors
from . import version as ver

__all__ = [
    "MARKER_PATTERN",
    "Marker",
    "locate",
    "substitute",
    "show",
    "read_content",
    "write_content",
    "show_file",
    "update_file",
]

logger = logging.getLogger(__name__)

MARKER_PATTERN = re.compile(r"""version\s*=\s*["'](\d+\.\d+\.\d+)["']""", re.ASCII)

PathLike = Union[str, pathlib.Path]


def _replace_digits(m: re.Match[str], new_str: str) -> str:
    s = m.group(0)
    start = m.start(1) - m.start(0)
    end = m.end(1) - m.start(0)
    return s[:start] + new_str + s[end:]


class Marker(NamedTuple):
    version: ver.Version
    # Span of the digits run inside the content, quotes excluded
    span: tuple[int, int]


def locate(content: str, path: PathLike = "<string>") -> Marker:
    m = MARKER_PATTERN.search(content)
    if m is None:
        msg = f"version not found in {path}"
        raise errors.VersionNotFoundError(msg)
    return Marker(version=ver.parse(m.group(1)), span=m.span(1))


def substitute(
    content: str,
    marker: Marker,
    new_version: ver.Version,
    replace_all: bool = False,
) -> str:
    """Return ``content`` with the marker's version replaced by ``new_version``.

    Only the digits run is rewritten, so the quote style and the whitespace
    around ``=`` stay as found. By default only the located marker changes,
    with ``replace_all=True`` every marker in the content gets the new value.
    """
    new_str = str(new_version)
    if replace_all:
        return MARKER_PATTERN.sub(lambda m: _replace_digits(m, new_str), content)
    start, end = marker.span
    return content[:start] + new_str + content[end:]


def show(content: str, path: PathLike = "<string>") -> ver.Version:
    return locate(content, path).version


def read_content(path: PathLike) -> str:
    # newline="" keeps CRLF files byte-identical after a rewrite
    try:
        with open(path, "rt", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError as e:
        msg = f"failed to read file {path}: {e.strerror or e}"
        raise errors.VersionFileNotFoundError(msg, path=str(path), cause=e) from e
    except (OSError, UnicodeDecodeError) as e:
        msg = f"failed to read file {path}: {e}"
        raise errors.FileReadError(msg, path=str(path), cause=e) from e


def _write_atomic(path: pathlib.Path, content: str) -> None:
    # Replace the file a symlink points to, not the link itself
    path = pathlib.Path(os.path.realpath(path))
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "wt", encoding="utf-8", newline="") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        if path.exists():
            os.chmod(tmp_name, stat.S_IMODE(path.stat().st_mode))
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def write_content(path: PathLike, content: str, atomic: bool = True) -> None:
    path = pathlib.Path(path)
    try:
        if atomic:
            _write_atomic(path, content)
        else:
            with open(path, "wt", encoding="utf-8", newline="") as f:
                f.write(content)
    except OSError as e:
        msg = f"failed to write to file {path}: {e}"
        raise errors.FileWriteError(msg, path=str(path), cause=e) from e


def show_file(path: PathLike) -> ver.Version:
    return show(read_content(path), path)


def update_file(
    path: PathLike,
    operation: ver.Operation,
    replace_all: bool = False,
    atomic: bool = True,
) -> tuple[ver.Version, ver.Version]:
    content = read_content(path)
    marker = locate(content, path)
    new_version = ver.transform(marker.version, operation)
    new_content = substitute(content, marker, new_version, replace_all=replace_all)
    logger.info(
        f"Writing {path} (atomic={atomic}, replace_all={replace_all}), "
        f"{len(new_content)} chars"
    )
    write_content(path, new_content, atomic=atomic)
    return marker.version, new_version
