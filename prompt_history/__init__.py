"""Prompt history: line-level version control for text documents."""

from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("prompt-history")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _package_version()
