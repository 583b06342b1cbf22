"""Whole-file JSON persistence.

Each collection is a single JSON array on disk. Every write serializes the
entire collection, every read deserializes it.
"""

import asyncio
import json
import shutil
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Generic, TypeVar

import pydantic
import structlog
from pydantic import BaseModel, ConfigDict

from taskcal.errors import StorageIOError
from taskcal.utils import now

logger = structlog.get_logger(__name__)


class JsonModel(BaseModel):
    """Base for records stored in a JSON collection file."""

    model_config = ConfigDict(populate_by_name=True)

    def to_json(self) -> dict[str, Any]:
        """Convert the model to the dictionary written to disk."""
        return self.model_dump(mode="json", by_alias=True)


M = TypeVar("M", bound=JsonModel)


class JsonCollection(Generic[M]):
    """One JSON array file holding every record of one model type.

    A missing, empty or unparseable file reads as an empty collection; an
    unparseable one is first copied aside. Single records that fail validation
    are skipped on read and written back as they were. Mutations go through
    transaction(), which serializes read-modify-write cycles on a per-file lock.
    """

    def __init__(self, path: Path, model: type[M]) -> None:
        self.path = Path(path)
        self.model = model
        self._lock = asyncio.Lock()

    def load_all(self) -> list[M]:
        """Read and validate the whole collection, skipping records that fail validation."""
        records, _ = self._load()
        return records

    def save_all(self, records: list[M], rejected: list[Any] | None = None) -> None:
        """Serialize the whole collection and atomically replace the file.

        ``rejected`` rows are raw JSON values that failed validation on load;
        they are appended unchanged so a write never drops them.
        """
        items = [record.to_json() for record in records] + list(rejected or [])
        payload = json.dumps(items, indent=2, ensure_ascii=False)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload + "\n", encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            logger.exception("storage_write_failed", path=str(self.path))
            raise StorageIOError(f"Cannot write collection file '{self.path}'") from e

    async def read(self) -> list[M]:
        """Snapshot of the collection, never taken mid-write."""
        async with self._lock:
            return self.load_all()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[list[M]]:
        """Hold the file lock across load, mutate and save.

        The yielded list is saved back when the block exits normally; if the
        block raises, nothing is written. Records that failed validation are
        carried through the save untouched.
        """
        async with self._lock:
            records, rejected = self._load()
            yield records
            self.save_all(records, rejected)

    def _load(self) -> tuple[list[M], list[Any]]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return [], []
        except OSError as e:
            logger.warning("storage_read_failed", path=str(self.path), error=str(e))
            return [], []

        if not raw.strip():
            return [], []

        try:
            items = json.loads(raw)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            self._preserve_corrupt_file(str(e))
            return [], []
        if not isinstance(items, list):
            self._preserve_corrupt_file(f"expected a JSON array, got {type(items).__name__}")
            return [], []

        records: list[M] = []
        rejected: list[Any] = []
        for index, item in enumerate(items):
            try:
                records.append(self.model.model_validate(item))
            except pydantic.ValidationError as e:
                logger.warning("storage_invalid_record", path=str(self.path), index=index, errors=e.error_count())
                rejected.append(item)
        return records, rejected

    def _preserve_corrupt_file(self, reason: str) -> None:
        # Timestamped so a later corruption never overwrites an earlier copy
        stamp = f"{now():%Y%m%dT%H%M%S%fZ}"
        backup_path = self.path.with_name(f"{self.path.name}.{stamp}.corrupt")
        suffix = 1
        while backup_path.exists():
            backup_path = self.path.with_name(f"{self.path.name}.{stamp}-{suffix}.corrupt")
            suffix += 1
        logger.warning("storage_corrupt_file", path=str(self.path), backup=str(backup_path), reason=reason)
        try:
            shutil.copyfile(self.path, backup_path)
        except OSError as e:
            logger.warning("storage_backup_failed", path=str(backup_path), error=str(e))
