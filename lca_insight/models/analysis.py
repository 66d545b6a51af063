from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .impacts import ImpactData, MaterialImpact, StageImpact
from .inventory import LCIEntry


class AnalysisStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class AnalysisSnapshot(BaseModel):
    """Point-in-time view of the inventory and its latest analysis."""

    model_config = ConfigDict(frozen=True)

    status: AnalysisStatus = AnalysisStatus.IDLE
    entries: List[LCIEntry] = Field(default_factory=list)
    impacts: List[ImpactData] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    error: Optional[str] = Field(
        default=None,
        description="User-facing message for the last failed analysis, if any.",
    )
    by_stage: List[StageImpact] = Field(default_factory=list)
    by_material: List[MaterialImpact] = Field(default_factory=list)
    total_co2eq: float = 0.0

    @property
    def is_loading(self) -> bool:
        return self.status == AnalysisStatus.LOADING


__all__ = ["AnalysisStatus", "AnalysisSnapshot"]
