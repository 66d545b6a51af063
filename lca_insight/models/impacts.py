from typing import List

from pydantic import BaseModel, Field


class ImpactData(BaseModel):
    material: str = Field(description="Name of the material or process.")
    stage: str = Field(description="The life cycle stage.")
    co2eq: float = Field(
        ge=0.0,
        description="Calculated carbon footprint in kg CO2 equivalent.",
    )


class AnalysisResult(BaseModel):
    impacts: List[ImpactData] = Field(
        description="List of environmental impacts for each inventory item."
    )
    recommendations: List[str] = Field(
        description="Actionable recommendations to reduce environmental impact."
    )


class StageImpact(BaseModel):
    stage: str
    co2eq: float


class MaterialImpact(BaseModel):
    material: str
    co2eq: float


__all__ = ["ImpactData", "AnalysisResult", "StageImpact", "MaterialImpact"]
