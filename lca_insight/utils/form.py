from __future__ import annotations

import math
from typing import Dict, List, Optional, Union

from lca_insight.models import LCIEntryDraft, LifeCycleStage

DEFAULT_UNIT = "kg"
DEFAULT_STAGE = LifeCycleStage.RAW_MATERIAL.value

COMMON_MATERIALS = [
    "Aluminum (Primary)",
    "Aluminum (Recycled)",
    "Cardboard",
    "Concrete",
    "Cotton",
    "Glass",
    "HDPE Plastic",
    "LDPE Plastic",
    "Leather",
    "PET Plastic",
    "Polypropylene (PP)",
    "Polyester",
    "Rubber",
    "Steel (Primary)",
    "Steel (Recycled)",
    "Wood (Hardwood)",
    "Wood (Softwood)",
]


class EntryValidationError(ValueError):
    """Raised when a submitted entry form has one or more invalid fields."""

    def __init__(self, errors: Dict[str, str]) -> None:
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = errors


def _parse_quantity(value: Union[str, float, int, None]) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def validate_entry_form(
    material: Optional[str],
    quantity: Union[str, float, int, None],
    unit: Optional[str],
    stage: Optional[str] = DEFAULT_STAGE,
) -> LCIEntryDraft:
    """Check raw form input and return a draft ready for the inventory store."""

    errors: Dict[str, str] = {}
    material_text = (material or "").strip()
    unit_text = (unit or "").strip()

    if not material_text:
        errors["material"] = "Material name is required."
    number = _parse_quantity(quantity)
    if number is None or number <= 0:
        errors["quantity"] = "Quantity must be a positive number."
    if not unit_text:
        errors["unit"] = "Unit is required."
    try:
        stage_value = LifeCycleStage(stage)
    except ValueError:
        errors["stage"] = "Stage must be one of the life cycle stages."

    if errors:
        raise EntryValidationError(errors)
    return LCIEntryDraft(
        material=material_text,
        quantity=number,
        unit=unit_text,
        stage=stage_value,
    )


def suggest_materials(text: Optional[str]) -> List[str]:
    needle = (text or "").strip().lower()
    if not needle:
        return []
    return [material for material in COMMON_MATERIALS if needle in material.lower()]


__all__ = [
    "COMMON_MATERIALS",
    "DEFAULT_STAGE",
    "DEFAULT_UNIT",
    "EntryValidationError",
    "suggest_materials",
    "validate_entry_form",
]
