from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field

from lca_insight.analysis import API_KEY_ENV


class Settings(BaseModel):
    """Runtime configuration for the backend application."""

    openai_api_key: Optional[str] = Field(
        default_factory=lambda: os.environ.get(API_KEY_ENV) or None,
        description="Credential for the impact estimation service.",
    )
    allowed_origins: List[str] = Field(
        default_factory=lambda: [
            origin.strip()
            for origin in os.environ.get(
                "LCA_ALLOWED_ORIGINS",
                "http://localhost:5173,http://127.0.0.1:5173,http://localhost:8050",
            ).split(",")
            if origin.strip()
        ],
        description="Origins permitted by the CORS middleware.",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
