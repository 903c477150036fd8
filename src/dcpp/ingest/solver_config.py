"""YAML/JSON configuration for solving and tracing postman tours."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

_KNOWN_KEYS = {"max_iterations", "start_vertex", "default_weight", "strict"}


@dataclass
class SolverConfig:
    max_iterations: Optional[int] = None
    start_vertex: Optional[str] = None
    default_weight: float = 1
    strict: bool = True

    def __post_init__(self) -> None:
        if self.max_iterations is not None:
            self.max_iterations = int(self.max_iterations)
            if self.max_iterations <= 0:
                raise ValueError("max_iterations must be positive when provided")
        if self.start_vertex is not None:
            self.start_vertex = str(self.start_vertex).strip() or None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "SolverConfig":
        if not isinstance(data, Mapping):
            raise TypeError("Solver configuration must be a mapping at the top level")
        unknown = set(data).difference(_KNOWN_KEYS)
        if unknown:
            raise ValueError(f"Unknown solver configuration keys: {', '.join(sorted(unknown))}")
        default_weight = data.get("default_weight", 1)
        strict = data.get("strict", True)
        if not isinstance(strict, bool):
            raise TypeError("'strict' must be a boolean")
        return cls(
            max_iterations=data.get("max_iterations"),
            start_vertex=data.get("start_vertex"),
            default_weight=float(default_weight),
            strict=strict,
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SolverConfig":
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Solver YAML not found at {config_path}")
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        return cls.from_mapping(data)

    @classmethod
    def from_json(cls, path: str | Path) -> "SolverConfig":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_mapping(data)

    @classmethod
    def load(cls, path: str | Path) -> "SolverConfig":
        """Dispatch on the file suffix (``.json`` or YAML otherwise)."""
        if Path(path).suffix.lower() == ".json":
            return cls.from_json(path)
        return cls.from_yaml(path)

    def to_yaml(self, path: str | Path) -> None:
        output: Dict[str, object] = {
            "default_weight": float(self.default_weight),
            "strict": self.strict,
        }
        if self.max_iterations is not None:
            output["max_iterations"] = int(self.max_iterations)
        if self.start_vertex is not None:
            output["start_vertex"] = self.start_vertex
        dest = Path(path)
        dest.parent.mkdir(parents=True, exist_ok=True)
        with dest.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(output, handle, sort_keys=True)


__all__ = ["SolverConfig"]
