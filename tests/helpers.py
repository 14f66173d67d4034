# ==============================================================================
# Файл: tests/helpers.py
# Назначение: Общие заглушки для тестов.
# ==============================================================================
from typing import Dict, Optional


class TableSource:
    """Источник значений по таблице; для неизвестных ключей - значение по умолчанию."""

    def __init__(self, table: Optional[Dict[str, float]] = None, default: float = 0.99):
        self.table = dict(table or {})
        self.default = default
        self.calls = []

    def value_for(self, key: str) -> float:
        self.calls.append(key)
        return self.table.get(key, self.default)
