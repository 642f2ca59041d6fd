"""Installed version of layr-search."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    try:
        return version("layr-search")
    except PackageNotFoundError:
        return "0.0.0"
