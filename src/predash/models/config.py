"""ProviderConfig - explicit per-client configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ProviderConfig(BaseModel):
    """Everything a provider client needs; clients never read env or globals."""

    model_config = {"frozen": True}

    base_url: str
    api_key: str | None = Field(None, description="Optional bearer token passed through as-is")
    use_mock: bool = False
    mock_fallback: bool = True
    timeout_sec: float = Field(10.0, gt=0)
