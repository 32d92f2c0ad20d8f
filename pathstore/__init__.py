"""
PathStore: delimiter-path access to nested JSON/YAML documents.

A PathStore wraps one nested document and lets callers read and write it
with keys like "event:simulator", with typed accessors on top.
"""
from importlib.metadata import version, PackageNotFoundError

from pathstore.core.store import PathStore
from pathstore.utils.size import parse_size_in_bytes

try:
    __version__ = version("pathstore")
except PackageNotFoundError:
    __version__ = "unknown"
__app_name__ = "PathStore"

__all__ = ["PathStore", "parse_size_in_bytes", "__version__"]
