from ._version import __version__, __version_info__  # noqa: F401
from .configurator import *  # noqa: F403
from .editor import *  # noqa: F403
from .errors import *  # noqa: F403
from .version import *  # noqa: F403

__all__ = (
    configurator.__all__  # type: ignore # noqa: F405
    + editor.__all__  # type: ignore # noqa: F405
    + errors.__all__  # type: ignore # noqa: F405
    + version.__all__  # type: ignore # noqa: F405
)
