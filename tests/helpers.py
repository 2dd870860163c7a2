import pathlib

PYPROJECT_CONTENT = 'name = "x"\nversion = "1.0.0"\n'


def write_file(
    dir_path: pathlib.Path, content: str, fname: str = "pyproject.toml"
) -> pathlib.Path:
    path = dir_path / fname
    # newline="" so CRLF content reaches the disk unchanged
    with open(path, "wt", encoding="utf-8", newline="") as f:
        f.write(content)
    return path


def read_file(path: pathlib.Path) -> str:
    with open(path, "rt", encoding="utf-8", newline="") as f:
        return f.read()
