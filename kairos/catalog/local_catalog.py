from __future__ import annotations

import json
from pathlib import Path

from kairos.schemas.catalog import Career


class LocalCareerCatalog:
    def __init__(self, catalog_path: str | Path | None = None) -> None:
        path = Path(catalog_path) if catalog_path else Path(__file__).with_name("careers.json")
        self._careers = self._load_careers(path)
        self._by_title = {career.title.strip().lower(): career for career in self._careers}

    @staticmethod
    def _load_careers(path: Path) -> tuple[Career, ...]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, list):
            raise RuntimeError(f"Career catalog '{path}' must contain a JSON list.")
        return tuple(Career.model_validate(item) for item in raw)

    def all(self) -> list[Career]:
        return list(self._careers)

    def find(self, title: str) -> Career | None:
        return self._by_title.get((title or "").strip().lower())
