"""Maps external vertex names to the dense indices used by the solver."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional


class VertexIndexer:
    """Assigns indices ``0..N-1`` in order of first appearance."""

    def __init__(self, names: Optional[Iterable[object]] = None) -> None:
        self._name_to_idx: Dict[str, int] = {}
        self._idx_to_name: List[str] = []
        for name in names or ():
            self.add(name)

    # ----------------------------------------------------------------- indexing
    def add(self, name: object) -> int:
        key = _normalize_name(name)
        idx = self._name_to_idx.get(key)
        if idx is None:
            idx = len(self._idx_to_name)
            self._name_to_idx[key] = idx
            self._idx_to_name.append(key)
        return idx

    def index_of(self, name: object) -> Optional[int]:
        return self._name_to_idx.get(_normalize_name(name))

    def name_of(self, index: int) -> str:
        return self._idx_to_name[int(index)]

    @property
    def names(self) -> List[str]:
        return list(self._idx_to_name)

    def __len__(self) -> int:
        return len(self._idx_to_name)

    def __contains__(self, name: object) -> bool:
        return _normalize_name(name) in self._name_to_idx

    # ------------------------------------------------------------------- IO
    def to_json_dict(self) -> Dict[str, object]:
        return {"vertices": list(self._idx_to_name)}

    def save(self, path: str | Path) -> None:
        with open(path, "w", encoding="utf-8") as handle:
            json.dump(self.to_json_dict(), handle, indent=2)

    @classmethod
    def load(cls, path: str | Path) -> "VertexIndexer":
        with open(path, "r", encoding="utf-8") as handle:
            payload = json.load(handle)
        return cls(payload.get("vertices") or [])


def _normalize_name(name: object) -> str:
    if name is None:
        raise ValueError("Vertex names cannot be None.")
    text = str(name).strip()
    if not text:
        raise ValueError("Vertex names cannot be empty.")
    return text


__all__ = ["VertexIndexer"]
