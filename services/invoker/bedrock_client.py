"""Bedrock runtime client with OTEL tracing."""

import json
import asyncio
from typing import Dict, Any
import boto3
from botocore.config import Config
from botocore.exceptions import ClientError
from opentelemetry import trace

ACCESS_DENIED_CODE = "AccessDeniedException"


def is_access_denied(exc: BaseException) -> bool:
    """True when Bedrock refused the call for lack of permission."""
    if not isinstance(exc, ClientError):
        return False
    return exc.response.get("Error", {}).get("Code") == ACCESS_DENIED_CODE


class BedrockClient:
    """Async Bedrock client issuing one InvokeModel call per request."""

    def __init__(
        self,
        model_id: str,
        region: str,
        runtime_client=None,
        control_client=None,
        tracer=None,
    ):
        self.model_id = model_id
        self.region = region

        # A single attempt: failures surface to the caller instead of retrying
        config = Config(retries={"total_max_attempts": 1})
        self.bedrock_runtime = runtime_client or boto3.client(
            "bedrock-runtime",
            region_name=region,
            config=config
        )
        self._bedrock = control_client
        self.tracer = tracer or trace.get_tracer(__name__)

    @property
    def bedrock(self):
        """Control-plane client, created on first use."""
        if self._bedrock is None:
            self._bedrock = boto3.client("bedrock", region_name=self.region)
        return self._bedrock

    async def check_model_visible(self) -> bool:
        """
        Check that the foundation model is visible to these credentials.

        GetFoundationModel only needs bedrock:GetFoundationModel; it does not
        prove that bedrock:InvokeModel is allowed, so a visible model can
        still answer every invocation with AccessDeniedException.
        """
        try:
            loop = asyncio.get_event_loop()
            response = await loop.run_in_executor(
                None,
                lambda: self.bedrock.get_foundation_model(modelIdentifier=self.model_id)
            )
            return response["modelDetails"]["modelId"] == self.model_id
        except Exception:
            return False

    async def invoke_model(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Invoke the model with tracing.

        Args:
            payload: Request body (will be JSON serialized)

        Returns:
            Parsed JSON response body

        Raises:
            botocore.exceptions.ClientError: If Bedrock rejects the call
            botocore.exceptions.BotoCoreError: On transport failures
            ValueError: If the body is not UTF-8 JSON
        """
        with self.tracer.start_as_current_span("bedrock.invoke_model") as span:
            span.set_attribute("bedrock.model_id", self.model_id)
            span.set_attribute("bedrock.region", self.region)

            try:
                loop = asyncio.get_event_loop()

                invoke_params = {
                    "modelId": self.model_id,
                    "body": json.dumps(payload),
                    "contentType": "application/json",
                    "accept": "application/json",
                }

                response = await loop.run_in_executor(
                    None,
                    lambda: self.bedrock_runtime.invoke_model(**invoke_params)
                )

                result = json.loads(response["body"].read().decode("utf-8"))
                span.set_attribute("bedrock.success", True)
                return result

            except Exception as e:
                span.set_attribute("bedrock.error", str(e))
                span.set_attribute("bedrock.error_type", type(e).__name__)
                if is_access_denied(e):
                    span.set_attribute("bedrock.access_denied", True)
                raise
