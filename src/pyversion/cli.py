import argparse
import logging
import pathlib
import sys
from typing import Optional

from . import configurator, editor, errors
from . import version as ver
from ._version import __version__

DEFAULT_PROJECT_FNAME = "pyproject.toml"

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    fmt = (
        "%(asctime)s.%(msecs)03d: %(levelname).1s "
        + "%(name)s.py:%(lineno)d] %(message)s"
    )
    logging.basicConfig(
        level=logging.WARNING,
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("pyversion").setLevel(
        logging.INFO if verbose else logging.WARNING
    )


def _make_common_parser(mutating: bool) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "-f",
        "--files",
        action="append",
        default=None,
        metavar="PATH",
        help="Files to process, repeatable or comma separated "
        f"(default: {DEFAULT_PROJECT_FNAME} in current dir)",
    )
    parser.add_argument(
        "--config",
        type=pathlib.Path,
        default=None,
        help=f"YAML config file (default: {configurator.DEFAULT_CONFIG_FNAME} "
        "in current dir, if present)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    if mutating:
        parser.add_argument(
            "--all-markers",
            action="store_true",
            default=None,
            help="Rewrite every version marker in the file, not only the first",
        )
        parser.add_argument(
            "--no-atomic",
            action="store_true",
            default=None,
            help="Write the file in place instead of temp file + rename",
        )
    return parser


def make_arg_parser() -> argparse.ArgumentParser:
    mutating_parser = _make_common_parser(mutating=True)
    show_parser = _make_common_parser(mutating=False)

    arg_parser = argparse.ArgumentParser(
        prog="pyversion",
        description="Manage the version number in pyproject.toml-like files",
    )
    arg_parser.add_argument("--version", action="store_true")
    subparsers = arg_parser.add_subparsers(dest="command")

    p = subparsers.add_parser(
        "increment",
        parents=[mutating_parser],
        help="Increment a version component (major, minor, or patch)",
    )
    p.add_argument("component")
    p.add_argument("--amount", default="1", help="Amount to increment by")

    p = subparsers.add_parser(
        "decrement",
        parents=[mutating_parser],
        help="Decrement a version component (major, minor, or patch)",
    )
    p.add_argument("component")
    p.add_argument("--amount", default="1", help="Amount to decrement by")

    p = subparsers.add_parser(
        "set",
        parents=[mutating_parser],
        help="Set a version component to a specific value",
    )
    p.add_argument("component")
    p.add_argument("value")

    subparsers.add_parser(
        "show",
        parents=[show_parser],
        help="Display the current version without modifying it",
    )
    return arg_parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    arg_parser = make_arg_parser()
    args = arg_parser.parse_args(argv)
    if not args.version and args.command is None:
        arg_parser.error("a command is required")
    return args


def split_files(files: Optional[list[str]]) -> list[str]:
    res: list[str] = []
    for entry in files or []:
        res.extend(f.strip() for f in entry.split(",") if f.strip())
    return res


def find_project_files(
    specified_files: list[str], cwd: Optional[pathlib.Path] = None
) -> list[str]:
    if specified_files:
        return specified_files

    current_dir = cwd or pathlib.Path.cwd()
    default_file = current_dir / DEFAULT_PROJECT_FNAME
    if default_file.is_file():
        return [str(default_file)]

    msg = f"no {DEFAULT_PROJECT_FNAME} found in current directory"
    raise errors.VersionFileNotFoundError(msg, path=str(default_file))


def make_operation_from_args(args: argparse.Namespace) -> ver.Operation:
    if args.command == "set":
        return ver.make_operation("set", args.component, args.value)
    return ver.make_operation(args.command, args.component, args.amount)


def _update_arrow() -> str:
    encoding = getattr(sys.stdout, "encoding", None) or "utf-8"
    try:
        "→".encode(encoding)
    except (UnicodeEncodeError, LookupError):
        return "->"
    return "→"


def run(args: argparse.Namespace) -> None:
    # Validate the command before touching any file
    operation = None
    if args.command != "show":
        operation = make_operation_from_args(args)

    config = configurator.load_config(args.config)
    files = find_project_files(split_files(args.files) or config.files)

    if operation is None:
        for fname in files:
            print(f"{fname}: {editor.show_file(fname)}")
        return

    replace_all = config.replace_all if args.all_markers is None else True
    atomic = config.atomic_write if args.no_atomic is None else False
    arrow = _update_arrow()
    for fname in files:
        old_version, new_version = editor.update_file(
            fname, operation, replace_all=replace_all, atomic=atomic
        )
        print(f"Updated {fname}: {old_version} {arrow} {new_version}")


def print_version() -> None:
    print(f"Using pyversion {__version__}")


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(verbose=getattr(args, "verbose", False))

    if args.version:
        print_version()
        return 0

    try:
        run(args)
    except errors.PyVersionError as e:
        logger.info(f"{args.command} failed: {type(e).__name__}")
        print(e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
