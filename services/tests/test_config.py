"""InvokerConfig defaults and environment overrides."""

import pytest
from pydantic import ValidationError

from invoker.config import InvokerConfig


def test_defaults_target_mixtral_in_us_west_2():
    config = InvokerConfig()

    assert config.region == "us-west-2"
    assert config.model_id == "mistral.mixtral-8x7b-instruct-v0:1"
    assert config.max_tokens == 500
    assert config.temperature == 0.5


def test_from_env_without_overrides_matches_defaults(monkeypatch):
    for name in ("AWS_REGION", "BEDROCK_MODEL_ID", "BEDROCK_MAX_TOKENS", "BEDROCK_TEMPERATURE"):
        monkeypatch.delenv(name, raising=False)

    assert InvokerConfig.from_env() == InvokerConfig()


def test_from_env_reads_overrides(monkeypatch):
    monkeypatch.setenv("AWS_REGION", "eu-west-3")
    monkeypatch.setenv("BEDROCK_MODEL_ID", "mistral.mistral-large-2402-v1:0")
    monkeypatch.setenv("BEDROCK_MAX_TOKENS", "128")
    monkeypatch.setenv("BEDROCK_TEMPERATURE", "0.9")

    config = InvokerConfig.from_env()

    assert config.region == "eu-west-3"
    assert config.model_id == "mistral.mistral-large-2402-v1:0"
    assert config.max_tokens == 128
    assert config.temperature == 0.9


@pytest.mark.parametrize("overrides", [{"max_tokens": 0}, {"temperature": 1.5}, {"temperature": -0.1}])
def test_rejects_out_of_range_generation_parameters(overrides):
    with pytest.raises(ValidationError):
        InvokerConfig(**overrides)


def test_is_immutable():
    config = InvokerConfig()

    with pytest.raises(ValidationError):
        config.max_tokens = 10
