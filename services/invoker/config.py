"""Invoker configuration: target region, model and generation parameters."""

import os

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_REGION = "us-west-2"
DEFAULT_MODEL_ID = "mistral.mixtral-8x7b-instruct-v0:1"


class InvokerConfig(BaseModel):
    """Where and how to invoke the model. Defaults target Mixtral 8x7B."""

    model_config = ConfigDict(frozen=True)

    region: str = DEFAULT_REGION
    model_id: str = DEFAULT_MODEL_ID
    max_tokens: int = Field(default=500, gt=0)
    temperature: float = Field(default=0.5, ge=0.0, le=1.0)

    @classmethod
    def from_env(cls) -> "InvokerConfig":
        """Build a config from environment overrides, falling back to defaults."""
        return cls(
            region=os.getenv("AWS_REGION", DEFAULT_REGION),
            model_id=os.getenv("BEDROCK_MODEL_ID", DEFAULT_MODEL_ID),
            max_tokens=int(os.getenv("BEDROCK_MAX_TOKENS", "500")),
            temperature=float(os.getenv("BEDROCK_TEMPERATURE", "0.5")),
        )
