"""Card template store backed by JSON files on disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from clario_bot.core.exceptions import TemplateUnavailable
from clario_bot.core.logging import get_logger
from clario_bot.core.ports import TemplateStorePort

logger = get_logger(__name__)

TEMPLATE_SUFFIX = ".json"


class FileTemplateStore(TemplateStorePort):
    """Read-only store resolving ``name`` to ``<base_dir>/<name>.json``."""

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def load(self, name: str) -> Any:
        path = self._resolve(name)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("unable to read card template %s: %s", path, exc)
            raise TemplateUnavailable(name, f"cannot read {path.name}") from exc
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("card template %s is not valid JSON: %s", path, exc)
            raise TemplateUnavailable(name, f"invalid JSON at line {exc.lineno}") from exc

    def names(self) -> list[str]:
        if not self._base_dir.is_dir():
            return []
        return sorted(path.stem for path in self._base_dir.glob(f"*{TEMPLATE_SUFFIX}"))

    def _resolve(self, name: str) -> Path:
        if not name or "/" in name or "\\" in name or ".." in name:
            raise TemplateUnavailable(name, "invalid template name")
        return self._base_dir / f"{name}{TEMPLATE_SUFFIX}"


__all__ = ["FileTemplateStore"]
