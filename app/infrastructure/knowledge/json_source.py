from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from app.application.dto.knowledge_files import (
    IntentsFileDTO,
    ProductsFileDTO,
    ScheduleFileDTO,
    build_knowledge_base,
)
from app.application.exceptions import KnowledgeBaseLoadError
from app.application.ports.knowledge_base import KnowledgeSourcePort
from app.domain.entities.knowledge_base import KnowledgeBase, PatternTable
from app.infrastructure.knowledge.default_patterns import default_pattern_table

BUNDLED_DATA_DIR = Path(__file__).resolve().parent / "data"

PRODUCTS_FILE = "products.json"
SCHEDULE_FILE = "schedule.json"
INTENTS_FILE = "intents.json"

ModelT = TypeVar("ModelT", bound=BaseModel)


class JsonKnowledgeSource(KnowledgeSourcePort):
    """
    Reads products.json, schedule.json and intents.json from one directory.

    Each file degrades on its own: a missing or invalid products file yields an empty
    catalog, a bad schedule file yields an empty schedule (responses fall back to canned
    text), and a bad intents file yields the built-in default pattern table.
    """

    def __init__(self, data_dir: str | Path | None = None) -> None:
        self._data_dir = Path(data_dir) if data_dir else BUNDLED_DATA_DIR
        self._logger = logging.getLogger(__name__)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def load_knowledge_base(self) -> KnowledgeBase:
        products = self._load_or_default(PRODUCTS_FILE, ProductsFileDTO)
        schedule = self._load_or_default(SCHEDULE_FILE, ScheduleFileDTO)
        kb = build_knowledge_base(products, schedule)
        self._logger.info(
            "Knowledge base loaded",
            extra={"reason": f"services={len(kb.services)} data_dir={self._data_dir}"},
        )
        return kb

    def load_pattern_table(self) -> PatternTable:
        try:
            table = self._parse(INTENTS_FILE, IntentsFileDTO).to_entity()
        except KnowledgeBaseLoadError as e:
            self._logger.warning("Using default intent patterns", extra={"error": str(e)})
            return default_pattern_table()
        if not table.patterns:
            self._logger.warning("Intents file has no patterns, using defaults", extra={"reason": INTENTS_FILE})
            return default_pattern_table()
        return table

    def _load_or_default(self, filename: str, model: type[ModelT]) -> ModelT:
        try:
            return self._parse(filename, model)
        except KnowledgeBaseLoadError as e:
            self._logger.warning("Knowledge file unusable, continuing without it", extra={"error": str(e)})
            return model()

    def _parse(self, filename: str, model: type[ModelT]) -> ModelT:
        path = self._data_dir / filename
        raw = self._read_json(path)
        try:
            return model.model_validate(raw)
        except ValidationError as e:
            raise KnowledgeBaseLoadError(f"{path}: {e.error_count()} validation error(s)") from e

    @staticmethod
    def _read_json(path: Path) -> Any:
        try:
            with path.open(encoding="utf-8") as fh:
                return json.load(fh)
        except FileNotFoundError as e:
            raise KnowledgeBaseLoadError(f"{path}: not found") from e
        except (OSError, json.JSONDecodeError) as e:
            raise KnowledgeBaseLoadError(f"{path}: {e}") from e
