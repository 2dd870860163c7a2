import logging
import re
from typing import Literal, NamedTuple

import pydantic

from . import errors

__all__ = [
    "COMPONENTS",
    "OPERATION_KINDS",
    "Version",
    "Operation",
    "parse",
    "normalize_component",
    "increment",
    "decrement",
    "set_component",
    "make_operation",
    "transform",
]

logger = logging.getLogger(__name__)

COMPONENTS = ("major", "minor", "patch")
OPERATION_KINDS = ("increment", "decrement", "set")

VERSION_PATTERN = re.compile(r"(\d+)\.(\d+)\.(\d+)", re.ASCII)
INTEGER_PATTERN = re.compile(r"-?\d+", re.ASCII)


class Version(pydantic.BaseModel):
    major: pydantic.NonNegativeInt
    minor: pydantic.NonNegativeInt
    patch: pydantic.NonNegativeInt

    model_config = pydantic.ConfigDict(frozen=True, extra="forbid")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class Operation(NamedTuple):
    kind: Literal["increment", "decrement", "set"]
    component: str
    argument: int


def parse(text: str) -> Version:
    m = VERSION_PATTERN.fullmatch(text)
    if m is None:
        msg = f"invalid version format: {text}"
        raise errors.MalformedVersionError(msg)
    major, minor, patch = (int(g) for g in m.groups())
    return Version(major=major, minor=minor, patch=patch)


def normalize_component(component: str) -> str:
    c = component.lower()
    if c not in COMPONENTS:
        msg = f"invalid component: {component} (must be 'major', 'minor', or 'patch')"
        raise errors.InvalidComponentError(msg)
    return c


def _check_amount(amount: int) -> None:
    if amount < 0:
        msg = f"invalid amount: {amount} (must be non-negative)"
        raise errors.InvalidValueError(msg)


def increment(version: Version, component: str, amount: int = 1) -> Version:
    """Raise ``component`` by ``amount`` and zero every lower component."""
    c = normalize_component(component)
    _check_amount(amount)
    if c == "major":
        return Version(major=version.major + amount, minor=0, patch=0)
    elif c == "minor":
        return Version(major=version.major, minor=version.minor + amount, patch=0)
    return Version(
        major=version.major, minor=version.minor, patch=version.patch + amount
    )


def decrement(version: Version, component: str, amount: int = 1) -> Version:
    """Lower ``component`` by ``amount``, clamped at zero, other components kept."""
    c = normalize_component(component)
    _check_amount(amount)
    new_value = max(0, getattr(version, c) - amount)
    return version.model_copy(update={c: new_value})


def set_component(version: Version, component: str, value: int) -> Version:
    c = normalize_component(component)
    if value < 0:
        msg = "version components cannot be negative"
        raise errors.InvalidValueError(msg)
    return version.model_copy(update={c: value})


def _to_int(argument: int | str, what: str) -> int:
    if isinstance(argument, bool):
        raise errors.InvalidValueError(f"invalid {what}: {argument}")
    if isinstance(argument, int):
        return argument
    text = argument.strip()
    if INTEGER_PATTERN.fullmatch(text) is None:
        msg = f"invalid {what}: {argument}"
        raise errors.InvalidValueError(msg)
    return int(text)


def make_operation(kind: str, component: str, argument: int | str = 1) -> Operation:
    """Validate a command before any file is touched.

    ``argument`` is the amount for increment/decrement and the new value for
    set. Strings are accepted so raw command line values can be passed in.
    """
    if kind not in OPERATION_KINDS:
        raise ValueError(f"Unknown operation kind={kind}")
    c = normalize_component(component)
    what = "value" if kind == "set" else "amount"
    n = _to_int(argument, what)
    if n < 0:
        if kind == "set":
            msg = "version components cannot be negative"
        else:
            msg = f"invalid {what}: {n} (must be non-negative)"
        raise errors.InvalidValueError(msg)
    return Operation(kind=kind, component=c, argument=n)  # type: ignore[arg-type]


def transform(version: Version, operation: Operation) -> Version:
    if operation.kind == "increment":
        new_version = increment(version, operation.component, operation.argument)
    elif operation.kind == "decrement":
        new_version = decrement(version, operation.component, operation.argument)
    elif operation.kind == "set":
        new_version = set_component(version, operation.component, operation.argument)
    else:
        raise ValueError(f"Unknown operation kind={operation.kind}")
    logger.info(f"{operation.kind} {operation.component}: {version} -> {new_version}")
    return new_version
