from typing import Optional

__all__ = [
    "PyVersionError",
    "InvalidComponentError",
    "InvalidValueError",
    "VersionNotFoundError",
    "MalformedVersionError",
    "ConfigError",
    "VersionFileError",
    "VersionFileNotFoundError",
    "FileReadError",
    "FileWriteError",
]


class PyVersionError(Exception):
    pass


class InvalidComponentError(PyVersionError, ValueError):
    pass


class InvalidValueError(PyVersionError, ValueError):
    pass


class VersionNotFoundError(PyVersionError, ValueError):
    pass


class MalformedVersionError(PyVersionError, ValueError):
    pass


class ConfigError(PyVersionError, ValueError):
    pass


class VersionFileError(PyVersionError):
    """Storage failure on a version file, keeps the path and the original error."""

    def __init__(
        self,
        msg: str,
        path: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(msg)
        self.path = path
        self.cause = cause


class VersionFileNotFoundError(VersionFileError):
    pass


class FileReadError(VersionFileError):
    pass


class FileWriteError(VersionFileError):
    pass
