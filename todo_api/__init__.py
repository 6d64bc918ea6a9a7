"""Todo/user REST API backed by MongoDB."""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("todo-api")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
