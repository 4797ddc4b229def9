"""Persistence helpers for exporting pool snapshots."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
import json
from typing import Any, Dict

from ..core.types import Pool


def pool_to_dict(pool: Pool) -> Dict[str, Any]:
    d = asdict(pool)
    d["status"] = pool.status.value
    return d


def write_json(path: str | Path, obj: Any):
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w") as f:
        json.dump(obj, f, indent=2)
