"""Shared fixtures: stubbed Bedrock runtime clients."""

import io
import json
import sys
from pathlib import Path

import boto3
import pytest
from botocore.response import StreamingBody
from botocore.stub import Stubber

# Add services/ to sys.path so imports work without an installed package
SERVICES_DIR = Path(__file__).resolve().parent.parent
if str(SERVICES_DIR) not in sys.path:
    sys.path.insert(0, str(SERVICES_DIR))

MODEL_ID = "mistral.mixtral-8x7b-instruct-v0:1"
REGION = "us-west-2"


def reply(data) -> dict:
    """InvokeModel response carrying ``data`` as its body."""
    raw = data if isinstance(data, bytes) else json.dumps(data).encode("utf-8")
    return {
        "body": StreamingBody(io.BytesIO(raw), len(raw)),
        "contentType": "application/json",
    }


def expected_call(prompt: str, max_tokens: int = 500, temperature: float = 0.5,
                  model_id: str = MODEL_ID) -> dict:
    """InvokeModel parameters the invoker should send for ``prompt``."""
    return {
        "modelId": model_id,
        "body": json.dumps({
            "prompt": f"<s>[INST] {prompt} [/INST]",
            "max_tokens": max_tokens,
            "temperature": temperature,
        }),
        "contentType": "application/json",
        "accept": "application/json",
    }


@pytest.fixture
def runtime_client():
    return boto3.client(
        "bedrock-runtime",
        region_name=REGION,
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(runtime_client):
    with Stubber(runtime_client) as stub:
        yield stub
