from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field

from lca_insight.utils.form import DEFAULT_STAGE, DEFAULT_UNIT


class EntrySubmission(BaseModel):
    material: Optional[str] = Field(default=None, description="Material or process name.")
    quantity: Optional[Union[float, str]] = Field(
        default=None, description="Positive amount, as a number or numeric string."
    )
    unit: Optional[str] = Field(default=DEFAULT_UNIT, description="Unit of the quantity.")
    stage: Optional[str] = Field(
        default=DEFAULT_STAGE, description="One of the life cycle stage names."
    )
