"""Environmental impact estimation backed by the OpenAI Responses API."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Optional, Sequence

from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from lca_insight.models import AnalysisResult, LCIEntry
from lca_insight.utils.query import (
    QueryConfig,
    build_analysis_request,
    build_debug_logger,
    load_query_config,
)

logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENAI_API_KEY"


class AnalysisError(Exception):
    """Base class for failed analysis attempts."""


class ServiceError(AnalysisError):
    """The remote call failed outright (network, auth, timeout or remote error)."""


class MalformedResponse(AnalysisError):
    """The remote call succeeded but the payload did not match the schema."""


class MissingCredentialError(RuntimeError):
    """Raised at construction time when no service credential is configured."""


class AnalysisClient:
    """Sends the whole inventory to the model and returns validated results.

    Every call is a fresh round-trip; nothing is cached and nothing is retried.
    """

    def __init__(
        self,
        client: Optional[Any] = None,
        config: Optional[QueryConfig] = None,
        api_key: Optional[str] = None,
    ) -> None:
        self._config = config or load_query_config()
        if client is None:
            key = api_key or os.getenv(API_KEY_ENV)
            if not key:
                raise MissingCredentialError(f"{API_KEY_ENV} environment variable not set")
            client = OpenAI(api_key=key, max_retries=0, timeout=self._config.timeout)
        self._client = client
        self._dbg = build_debug_logger(self._config)

    @property
    def config(self) -> QueryConfig:
        return self._config

    def analyze(self, entries: Sequence[LCIEntry]) -> AnalysisResult:
        """Estimate impacts for ``entries``.

        Raises :class:`ServiceError` when the call itself fails and
        :class:`MalformedResponse` when the reply is not JSON or does not
        validate against :class:`AnalysisResult`.
        """

        request = build_analysis_request(entries)
        self._dbg(f"[lca] Analysing {len(entries)} entries with {self._config.model}")
        self._dbg(f"[lca] prompt: {request.prompt}")
        try:
            response = self._client.responses.parse(
                model=self._config.model,
                instructions=request.instructions,
                input=request.prompt,
                text_format=request.text_format,
                temperature=self._config.temperature,
            )
        except OpenAIError as exc:
            logger.error("Analysis request failed: %s", exc)
            raise ServiceError(f"analysis request failed: {exc}") from exc
        except (ValidationError, json.JSONDecodeError) as exc:
            logger.error("Failed to parse AI response: %s", exc)
            raise MalformedResponse("AI response was not valid JSON for the analysis schema.") from exc

        result = getattr(response, "output_parsed", None)
        if not isinstance(result, AnalysisResult):
            logger.error(
                "AI response carried no parsed output: %r",
                getattr(response, "output_text", None),
            )
            raise MalformedResponse("AI response contained no analysis.")
        self._dbg(
            f"[lca] Received {len(result.impacts)} impacts and "
            f"{len(result.recommendations)} recommendations"
        )
        return result


__all__ = [
    "AnalysisClient",
    "AnalysisError",
    "MalformedResponse",
    "MissingCredentialError",
    "ServiceError",
]
