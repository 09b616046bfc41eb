"""Static code review scanner package."""

from importlib.metadata import version, PackageNotFoundError

from loguru import logger

try:
    __version__ = version("code-review-scanner")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0-dev"

# Library code stays silent until an application opts in via configure_logging.
logger.disable("codereview")

__all__ = ["__version__"]
