from typing import Dict, Any
from pathlib import Path
import copy

import tomllib
import tomli_w


class Settings:
    DEFAULTS: Dict[str, Any] = {
        "sensor": {
            "bus": 1,
            "address": 0x42,
        },
        "battery": {
            "empty_voltage": 6.0,
            "full_voltage": 8.4,
        },
        "monitor": {
            "interval": 5.0,
        },
        "log": "INFO",
    }

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self.settings: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        if self.path.exists():
            with self.path.open("rb") as file:
                loaded = tomllib.load(file)
                self.settings = self._merge(copy.deepcopy(self.DEFAULTS), loaded)
        else:
            self.settings = copy.deepcopy(self.DEFAULTS)

    def save(self) -> None:
        serialized = self._remove_none(self.settings)
        with self.path.open("wb") as f:
            f.write(tomli_w.dumps(serialized).encode("utf-8"))

    def get(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.settings[key] = value

    def delete(self, key: str) -> None:
        if key in self.settings:
            del self.settings[key]

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        for key, value in override.items():
            if (
                key in base
                and isinstance(base[key], dict)
                and isinstance(value, dict)
            ):
                base[key] = self._merge(base[key], value)
            else:
                base[key] = value
        return base

    def _remove_none(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._remove_none(v) for k, v in obj.items() if v is not None}
        elif isinstance(obj, list):
            return [self._remove_none(v) for v in obj if v is not None]
        else:
            return obj
