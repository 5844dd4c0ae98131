"""Save/load boundary between a registry's codec and the filesystem."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Generic, TypeVar

from g42warehouse.codec import RecordCodec
from g42warehouse.errors import PersistenceError
from g42warehouse.registry import Registry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LoadStatus(Enum):
    LOADED = "loaded"
    NO_PRIOR_STATE = "no_prior_state"


@dataclass
class LoadReport:
    status: LoadStatus
    loaded: int = 0
    skipped: int = 0


class PersistenceGateway(Generic[T]):
    """Writes a registry to one file and restores it from that file.

    Files are read and written whole. A missing file means first run and
    yields an empty registry; a file that cannot be read at all raises
    ``PersistenceError`` after emptying the registry.
    """

    def __init__(self, codec: RecordCodec[T], registry: Registry[T]) -> None:
        self.codec = codec
        self.registry = registry

    def save(self, path: Path | str) -> int:
        """Overwrite ``path`` with the registry's records. Returns the record count."""
        path = Path(path)
        lines = self.codec.encode(self.registry)
        content = "".join(f"{line}\n" for line in lines)
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Cannot write {self.codec.family} records to {path}: {e}") from e
        logger.info("Saved %d %s records to %s", len(lines), self.codec.family, path)
        return len(lines)

    def load(self, path: Path | str) -> LoadReport:
        """Replace the registry's contents with the records stored at ``path``."""
        path = Path(path)
        if not path.exists():
            self.registry._clear()
            logger.info("No %s file at %s, starting empty", self.codec.family, path)
            return LoadReport(LoadStatus.NO_PRIOR_STATE)

        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            self.registry._clear()
            raise PersistenceError(f"Cannot read {self.codec.family} records from {path}: {e}") from e

        try:
            decoded = self.codec.decode(text.splitlines(), self.registry)
        except Exception as e:
            self.registry._clear()
            raise PersistenceError(f"Cannot decode {self.codec.family} records from {path}: {e}") from e

        if decoded.skipped:
            logger.warning(
                "Loaded %d %s records from %s, skipped %d malformed",
                decoded.loaded, self.codec.family, path, decoded.skipped,
            )
        else:
            logger.info("Loaded %d %s records from %s", decoded.loaded, self.codec.family, path)
        return LoadReport(LoadStatus.LOADED, loaded=decoded.loaded, skipped=decoded.skipped)
