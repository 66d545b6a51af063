from .analysis import AnalysisSnapshot, AnalysisStatus
from .impacts import AnalysisResult, ImpactData, MaterialImpact, StageImpact
from .inventory import STAGE_ORDER, LCIEntry, LCIEntryDraft, LifeCycleStage

__all__ = [
    "AnalysisResult",
    "AnalysisSnapshot",
    "AnalysisStatus",
    "ImpactData",
    "LCIEntry",
    "LCIEntryDraft",
    "LifeCycleStage",
    "MaterialImpact",
    "STAGE_ORDER",
    "StageImpact",
]
