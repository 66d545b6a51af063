from __future__ import annotations

from functools import lru_cache

from lca_insight.analysis import AnalysisClient
from lca_insight.orchestrator import AnalysisOrchestrator

from .config import get_settings


@lru_cache
def get_orchestrator() -> AnalysisOrchestrator:
    settings = get_settings()
    return AnalysisOrchestrator(AnalysisClient(api_key=settings.openai_api_key))
