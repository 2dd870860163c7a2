import logging
import pathlib
from typing import Any, Optional, Union

import pydantic
import yaml

from . import errors
from ._version import __version__

__all__ = [
    "DEFAULT_CONFIG_FNAME",
    "PyVersionConfig",
    "read_config",
    "load_config",
]

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FNAME = ".pyversion.yaml"


class PyVersionConfig(pydantic.BaseModel):
    pyversion_version: Optional[str] = None

    files: list[str] = []
    replace_all: bool = False
    atomic_write: bool = True

    model_config = pydantic.ConfigDict(extra="forbid")


def read_config(fname: Union[str, pathlib.Path]) -> dict[str, Any]:
    try:
        with open(fname, "rt", encoding="utf-8") as f:
            config_raw = yaml.safe_load(f)
    except OSError as e:
        raise errors.ConfigError(f"failed to read config {fname}: {e}") from e
    except yaml.YAMLError as e:
        raise errors.ConfigError(f"invalid YAML in config {fname}: {e}") from e

    if config_raw is None:
        return {}
    if not isinstance(config_raw, dict):
        msg = f"config {fname} must be a mapping, got {type(config_raw).__name__}"
        raise errors.ConfigError(msg)
    return config_raw


def load_config(
    fname: Optional[Union[str, pathlib.Path]] = None,
    cwd: Optional[pathlib.Path] = None,
) -> PyVersionConfig:
    """Load ``fname``, or ``.pyversion.yaml`` from ``cwd`` when it exists.

    Relative entries of ``files`` are resolved against the config file's
    directory. Without any config file the defaults are returned.
    """
    if fname is None:
        candidate = (cwd or pathlib.Path.cwd()) / DEFAULT_CONFIG_FNAME
        if not candidate.is_file():
            return PyVersionConfig()
        fname = candidate

    config_path = pathlib.Path(fname)
    config_raw = read_config(config_path)
    try:
        config = PyVersionConfig(**config_raw)
    except pydantic.ValidationError as e:
        raise errors.ConfigError(f"invalid config {config_path}: {e}") from e

    if (
        config.pyversion_version is not None
        and config.pyversion_version != __version__
    ):
        logger.warning(
            f"Config {config_path} was written for pyversion "
            f"{config.pyversion_version}, running {__version__}"
        )

    base_dir = config_path.parent
    config.files = [
        str(p) if p.is_absolute() else str(base_dir / p)
        for p in (pathlib.Path(f) for f in config.files)
    ]
    logger.info(f"Loaded config {config_path}: {config}")
    return config
