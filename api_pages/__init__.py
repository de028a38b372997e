"""API-driven server-rendered pages."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("api-driven-pages")
except PackageNotFoundError:
    __version__ = "dev"
