# ==============================================================================
# Файл: geocache_engine/storage/kv_store.py
# Назначение: Долговременное хранилище "ключ -> строка" для сохранений.
# ==============================================================================
from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Интерфейс хранилища (аналог localStorage в браузере)."""

    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...
    def clear(self) -> None: ...


class MemoryStore:
    """Хранилище в памяти: для тестов и запуска без диска."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


def _ensure_path_exists(path: Path) -> None:
    """Убеждается, что директория для файла существует."""
    path.parent.mkdir(parents=True, exist_ok=True)


def _atomic_write_json(path: Path, data: Dict[str, str]) -> None:
    """Атомарно записывает данные в JSON файл для предотвращения битых файлов."""
    _ensure_path_exists(path)
    tmp_path = path.with_name(path.name + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    os.replace(tmp_path, path)


class JsonFileStore:
    """
    Все ключи лежат в одном JSON-объекте на диске.
    Каждая запись переписывает файл целиком (атомарно), так что после
    падения процесса на диске остаётся последнее завершённое состояние.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Store file %s is unreadable, treating as empty: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store file %s is not a JSON object, treating as empty", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        _atomic_write_json(self.path, data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            _atomic_write_json(self.path, data)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.debug("Store file %s removed", self.path)
