from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from lca_insight.analysis import AnalysisClient
from lca_insight.models import LCIEntryDraft, LifeCycleStage
from lca_insight.orchestrator import AnalysisOrchestrator
from lca_insight.utils.query import QueryConfig


class FakeResponses:
    """Stands in for ``OpenAI().responses`` and records every request."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.output_text: Optional[str] = None
        self.error: Optional[Exception] = None

    def parse(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        # The SDK validates output_text against text_format and lets
        # pydantic.ValidationError escape on mismatch.
        parsed = kwargs["text_format"].model_validate_json(self.output_text or "")
        return SimpleNamespace(output_text=self.output_text, output_parsed=parsed)


class FakeOpenAI:
    def __init__(self) -> None:
        self.responses = FakeResponses()


def analysis_payload(entries: List[Dict[str, Any]], recommendations: Optional[List[str]] = None) -> str:
    return json.dumps(
        {
            "impacts": entries,
            "recommendations": recommendations
            if recommendations is not None
            else ["Use recycled steel.", "Reduce transport distance.", "Design for disassembly."],
        }
    )


@pytest.fixture()
def query_config() -> QueryConfig:
    return QueryConfig(model="gpt-4o-mini", temperature=0.5, timeout=5.0, debug=False)


@pytest.fixture()
def fake_openai() -> FakeOpenAI:
    fake = FakeOpenAI()
    fake.responses.output_text = analysis_payload(
        [{"material": "Steel", "stage": "Manufacturing & Processing", "co2eq": 5.0}]
    )
    return fake


@pytest.fixture()
def analysis_client(fake_openai: FakeOpenAI, query_config: QueryConfig) -> AnalysisClient:
    return AnalysisClient(client=fake_openai, config=query_config)


@pytest.fixture()
def orchestrator(analysis_client: AnalysisClient) -> AnalysisOrchestrator:
    return AnalysisOrchestrator(analysis_client)


@pytest.fixture()
def steel_draft() -> LCIEntryDraft:
    return LCIEntryDraft(
        material="Steel",
        quantity=10.0,
        unit="kg",
        stage=LifeCycleStage.MANUFACTURING,
    )


@pytest.fixture()
def glass_draft() -> LCIEntryDraft:
    return LCIEntryDraft(
        material="Glass",
        quantity=2.5,
        unit="kg",
        stage=LifeCycleStage.RAW_MATERIAL,
    )


@pytest.fixture()
def make_payload():
    return analysis_payload
