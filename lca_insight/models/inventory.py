from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LifeCycleStage(str, Enum):
    RAW_MATERIAL = "Raw Material Acquisition"
    MANUFACTURING = "Manufacturing & Processing"
    TRANSPORT = "Distribution & Transport"
    USE = "Use & Maintenance"
    END_OF_LIFE = "End-of-Life"


STAGE_ORDER: List[str] = [stage.value for stage in LifeCycleStage]


class LCIEntryDraft(BaseModel):
    """An inventory record as submitted, before the store assigns an id."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    material: str = Field(min_length=1, description="Name of the material or process.")
    quantity: float = Field(gt=0, description="Amount of material, in `unit`.")
    unit: str = Field(min_length=1, description="Free-text unit (e.g. kg, kWh, km).")
    stage: LifeCycleStage = Field(description="Life cycle stage the entry belongs to.")

    @field_validator("material", "unit", mode="before")
    @classmethod
    def _strip_fields(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return str(value).strip()


class LCIEntry(LCIEntryDraft):
    id: int = Field(description="Process-unique identifier assigned by the inventory store.")


__all__ = ["LifeCycleStage", "STAGE_ORDER", "LCIEntryDraft", "LCIEntry"]
