"""Pydantic models for the Bedrock Mistral wire format and the predict API."""

from pydantic import BaseModel, Field
from typing import List, Optional


class MistralRequest(BaseModel):
    """InvokeModel body for Mistral instruct models."""
    prompt: str
    max_tokens: int
    temperature: float


class MistralOutput(BaseModel):
    text: str
    stop_reason: Optional[str] = None


class MistralResponse(BaseModel):
    """InvokeModel reply body."""
    outputs: List[MistralOutput]


class PredictRequest(BaseModel):
    """Prediction request payload."""
    prompt: str = Field(min_length=1)


class PredictResponse(BaseModel):
    """Prediction response."""
    completions: List[str]
    model_id: str
    latency_ms: float
    correlation_id: str
