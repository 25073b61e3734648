"""
Request schemas for v1 API endpoints.
"""
from typing import Literal
from pydantic import BaseModel, Field


class AnalyzeTxRequest(BaseModel):
    """Request for /v1/analyze-tx"""
    raw: str = Field(default="", description="Hex calldata or a JSON tx object with `data` / `to`")
    explanation: Literal["model", "rule-based"] = Field(
        default="model",
        description="Explanation strategy; the model path never falls back on its own"
    )
