# plank_solver/io_json.py
# Load a project job JSON into StockPiece / DemandPiece lists + SAConfig.
#
# Expected JSON shape:
# {
#   "name": "Bookcase",
#   "planks": [{"id": "p1", "length": 2000, "width": 300, "thickness": 18,
#               "material": "oak", "quantity": 3}],
#   "cuts":   [{"id": "shelf", "length": 760, "width": 280, "thickness": 18,
#               "quantity": 4, "label": "Shelf"}],
#   "settings": {"kerf": 4, "iterations": 500, "seed": 42, ...}
# }
# "settings" keys are SAConfig field names; "kerf" and "tolerance" are accepted as
# short aliases for kerf_thickness / position_tolerance. "unit" (mm, cm, inches) only
# labels lengths in the report; dimensions are never converted.

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List

from .config import DEFAULTS, SAConfig, check_unit, make_config
from .types import DemandPiece, StockPiece
from .utils import as_quantity

_SETTING_ALIASES = {
    "kerf": "kerf_thickness",
    "tolerance": "position_tolerance",
    "restarts": "random_restarts",
    "neighbors": "neighbors_per_iteration",
}


@dataclass(frozen=True)
class JsonLoadResult:
    name: str
    stock: List[StockPiece]
    demand: List[DemandPiece]
    config: SAConfig
    unit: str = DEFAULTS.default_unit


def _require(item: Dict[str, Any], key: str, kind: str) -> Any:
    if key not in item:
        raise ValueError(f"{kind} missing '{key}': {item}")
    return item[key]


def stock_from_dict(item: Dict[str, Any]) -> StockPiece:
    return StockPiece(
        id=str(_require(item, "id", "plank")),
        length=float(_require(item, "length", "plank")),
        width=float(_require(item, "width", "plank")),
        thickness=float(_require(item, "thickness", "plank")),
        material=str(item.get("material") or ""),
        quantity=as_quantity(item.get("quantity", 1)),
    )


def demand_from_dict(item: Dict[str, Any]) -> DemandPiece:
    label = item.get("label")
    return DemandPiece(
        id=str(_require(item, "id", "cut")),
        length=float(_require(item, "length", "cut")),
        width=float(_require(item, "width", "cut")),
        thickness=float(_require(item, "thickness", "cut")),
        quantity=as_quantity(item.get("quantity", 1)),
        label=str(label) if label else None,
    )


def config_from_settings(settings: Dict[str, Any]) -> SAConfig:
    known = {f.name for f in fields(SAConfig)}
    overrides: Dict[str, Any] = {}
    for key, value in settings.items():
        name = _SETTING_ALIASES.get(key, key)
        if name not in known:
            raise ValueError(f"Unknown setting '{key}'")
        overrides[name] = value
    return make_config(**overrides)


def load_job_json(path: str | Path) -> JsonLoadResult:
    """
    Load job definition from JSON and convert to (stock, demand, config).
    Dimension/quantity sanity is left to optimize() (InvalidInputError).
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("Job JSON must be an object with 'planks' and 'cuts'.")

    stock = [stock_from_dict(it) for it in data.get("planks") or []]
    demand = [demand_from_dict(it) for it in data.get("cuts") or []]
    if not demand:
        raise ValueError("JSON missing 'cuts'.")

    settings = dict(data.get("settings") or {})
    unit = check_unit(str(settings.pop("unit", DEFAULTS.default_unit)))
    config = config_from_settings(settings)
    return JsonLoadResult(
        name=str(data.get("name") or path.stem),
        stock=stock,
        demand=demand,
        config=config,
        unit=unit,
    )


def dump_job_json(
    name: str,
    stock: List[StockPiece],
    demand: List[DemandPiece],
    path: str | Path,
    settings: Dict[str, Any] | None = None,
) -> None:
    """Write a job file in the same shape load_job_json reads."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "name": name,
        "planks": [
            {
                "id": s.id,
                "length": s.length,
                "width": s.width,
                "thickness": s.thickness,
                "material": s.material,
                "quantity": s.quantity,
            }
            for s in stock
        ],
        "cuts": [
            {
                "id": d.id,
                "length": d.length,
                "width": d.width,
                "thickness": d.thickness,
                "quantity": d.quantity,
                "label": d.label,
            }
            for d in demand
        ],
        "settings": dict(settings or {}),
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
