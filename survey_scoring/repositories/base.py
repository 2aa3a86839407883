"""
Base Repository - Survey Scoring Engine
survey_scoring/repositories/base.py

In-memory store keyed by entity id, optionally seeded from a JSON file in
DATA_DIR. The engine defines no persisted schema of its own; a database-backed
store only needs to honor the same read methods.
"""

import json
import logging
from pathlib import Path
from threading import RLock
from typing import Dict, Generic, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from survey_scoring.core.exceptions import EntityNotFoundException, SeedDataException

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseRepository(Generic[ModelT]):
    """Entity store with seed loading and id lookup."""

    MODEL: Type[BaseModel]
    ENTITY_NAME: str = "Entity"
    SEED_FILE: Optional[str] = None

    def __init__(self, data_dir: Optional[Path] = None):
        self._items: Dict[str, ModelT] = {}
        self._lock = RLock()
        if data_dir is not None and self.SEED_FILE:
            self.load_seed(Path(data_dir) / self.SEED_FILE)

    def load_seed(self, path: Path) -> int:
        """
        Load entities from a JSON array file. A missing file is not an error.

        Returns:
            Number of entities loaded.

        Raises:
            SeedDataException: File is unreadable or fails validation.
        """
        if not path.exists():
            logger.info("No seed file at %s, starting empty", path)
            return 0

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            items = TypeAdapter(List[self.MODEL]).validate_python(raw)
        except (OSError, json.JSONDecodeError) as e:
            raise SeedDataException(str(path), str(e))
        except ValidationError as e:
            raise SeedDataException(str(path), f"{e.error_count()} validation error(s): {e}")

        self.add_many(items)
        logger.info("Loaded %d %s record(s) from %s", len(items), self.ENTITY_NAME, path)
        return len(items)

    def add(self, item: ModelT) -> ModelT:
        with self._lock:
            self._items[item.id] = item
        return item

    def add_many(self, items: Iterable[ModelT]) -> None:
        with self._lock:
            for item in items:
                self._items[item.id] = item

    def get_by_id(self, entity_id: str) -> ModelT:
        """
        Raises:
            EntityNotFoundException: No entity with this id.
        """
        item = self._items.get(entity_id)
        if item is None:
            raise EntityNotFoundException(self.ENTITY_NAME, entity_id)
        return item

    def find_by_id(self, entity_id: str) -> Optional[ModelT]:
        return self._items.get(entity_id)

    def exists(self, entity_id: str) -> bool:
        return entity_id in self._items

    def get_all(self) -> List[ModelT]:
        return list(self._items.values())

    def delete(self, entity_id: str) -> None:
        """
        Raises:
            EntityNotFoundException: No entity with this id.
        """
        with self._lock:
            if entity_id not in self._items:
                raise EntityNotFoundException(self.ENTITY_NAME, entity_id)
            del self._items[entity_id]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
