"""
CSSClone — duplicated declaration detector for stylesheets.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cssclone")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = ["__version__"]
