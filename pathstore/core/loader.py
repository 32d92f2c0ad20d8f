"""
Build PathStores from documents on disk.
"""
import logging
from pathlib import Path

from pathstore.core.store import DEFAULT_DELIMITER, PathStore

YAML_SUFFIXES = {".yaml", ".yml"}

logger = logging.getLogger("pathstore")


def load_store(path: Path, *, delimiter: str = DEFAULT_DELIMITER) -> PathStore:
    """
    Read a JSON or YAML document into a PathStore, picking the decoder by
    file suffix. A document that fails to decode gives an empty store.
    """
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")
    logger.debug("Loading document from %s", path)
    raw = path.read_bytes()
    if path.suffix.lower() in YAML_SUFFIXES:
        return PathStore.from_yaml(raw, delimiter=delimiter)
    return PathStore.from_json(raw, delimiter=delimiter)
