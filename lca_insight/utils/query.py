from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from textwrap import dedent
from typing import Callable, Sequence, Type

from lca_insight.models import AnalysisResult, LCIEntry

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTIONS = dedent(
    """
    You are a sophisticated AI Life Cycle Assessment (LCA) engine for an educational dashboard.
    Your purpose is to help students understand environmental impacts by analyzing their data and providing clear, actionable insights.
    You must always return a valid JSON object that strictly adheres to the provided schema.
    """
).strip()


@dataclass(frozen=True)
class QueryConfig:
    model: str
    temperature: float
    timeout: float
    debug: bool


@dataclass(frozen=True)
class AnalysisRequest:
    instructions: str
    prompt: str
    text_format: Type[AnalysisResult] = AnalysisResult


def load_query_config() -> QueryConfig:
    model = os.getenv("LCA_MODEL", "gpt-4o-mini")
    temperature = float(os.getenv("LCA_TEMPERATURE", "0.5"))
    timeout = float(os.getenv("LCA_TIMEOUT", "60"))
    debug = os.getenv("LCA_DEBUG", "0").lower() in ("1", "true", "yes")
    return QueryConfig(model=model, temperature=temperature, timeout=timeout, debug=debug)


def build_debug_logger(config: QueryConfig) -> Callable[[str], None]:
    def _dbg(message: str) -> None:
        if config.debug:
            logger.info(message)

    return _dbg


def serialise_entries(entries: Sequence[LCIEntry]) -> str:
    """Render entries as the JSON list embedded in the prompt (ids omitted)."""

    payload = [entry.model_dump(mode="json", exclude={"id"}) for entry in entries]
    return json.dumps(payload, indent=2)


def build_analysis_prompt(entries: Sequence[LCIEntry]) -> str:
    return dedent(
        """
        Given the following list of Life Cycle Inventory (LCI) entries for a product, perform the following tasks:
        1. For each entry, estimate the Carbon Footprint in kg CO2eq. Use standard, recognized emission factors. If a specific factor is not available, use a reasonable, educated estimate for a similar material or process.
        2. Provide 3 to 5 actionable, specific, and creative recommendations for reducing the overall environmental impact. The recommendations should be easy for students to understand and inspiring.

        Here is the LCI data:
        """
    ).strip() + "\n" + serialise_entries(entries)


def build_analysis_request(entries: Sequence[LCIEntry]) -> AnalysisRequest:
    if not entries:
        raise ValueError("cannot build an analysis request for an empty inventory")
    return AnalysisRequest(
        instructions=SYSTEM_INSTRUCTIONS,
        prompt=build_analysis_prompt(entries),
    )


__all__ = [
    "AnalysisRequest",
    "QueryConfig",
    "SYSTEM_INSTRUCTIONS",
    "build_analysis_prompt",
    "build_analysis_request",
    "build_debug_logger",
    "load_query_config",
    "serialise_entries",
]
