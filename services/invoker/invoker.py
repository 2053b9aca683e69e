"""Mixtral 8x7B Instruct invocation on Amazon Bedrock."""

import logging
from typing import List, Optional

from invoker.bedrock_client import BedrockClient, is_access_denied
from invoker.config import InvokerConfig
from invoker.genai_spans import GenAISpanContext
from invoker.models import MistralRequest, MistralResponse
from invoker.results import AccessDenied, Completions, InvocationResult

logger = logging.getLogger(__name__)

# Mistral instruct models expect the prompt inside this wrapper
INSTRUCTION_TEMPLATE = "<s>[INST] {prompt} [/INST]"


def build_instruction(prompt: str) -> str:
    """Wrap a raw prompt in the Mistral instruction template."""
    return INSTRUCTION_TEMPLATE.format(prompt=prompt)


class InferenceInvoker:
    """Sends one prompt to the configured model and returns its completions."""

    def __init__(
        self,
        config: Optional[InvokerConfig] = None,
        runtime_client=None,
        tracer=None,
    ):
        self.config = config or InvokerConfig()
        self.tracer = tracer
        self.client = BedrockClient(
            model_id=self.config.model_id,
            region=self.config.region,
            runtime_client=runtime_client,
            tracer=tracer,
        )

    def build_payload(self, prompt: str) -> MistralRequest:
        return MistralRequest(
            prompt=build_instruction(prompt),
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
        )

    async def invoke(self, prompt: str) -> InvocationResult:
        """
        Run an inference for ``prompt``.

        Returns:
            Completions with one text per model output, or AccessDenied if
            the caller may not invoke the model.

        Raises:
            Any other failure from the request, transport or response
            parsing, unchanged.
        """
        payload = self.build_payload(prompt)

        with GenAISpanContext(
            model_id=self.config.model_id,
            region=self.config.region,
            max_tokens=payload.max_tokens,
            temperature=payload.temperature,
            tracer=self.tracer,
        ) as genai_span:
            try:
                body = await self.client.invoke_model(payload.model_dump())
            except Exception as e:
                if not is_access_denied(e):
                    raise
                denied = AccessDenied(model_id=self.config.model_id)
                logger.error(denied.message, extra={"attributes": {
                    "genai.request.model": self.config.model_id,
                    "cloud.region": self.config.region,
                }})
                genai_span.record_denied()
                return denied

            response = MistralResponse.model_validate(body)
            genai_span.record_completion([o.stop_reason for o in response.outputs])

        return Completions(texts=[o.text for o in response.outputs])


async def invoke_mixtral_8x7b(
    prompt: str,
    config: Optional[InvokerConfig] = None,
) -> Optional[List[str]]:
    """Completions for ``prompt``, or None when access to the model is denied."""
    result = await InferenceInvoker(config).invoke(prompt)
    if isinstance(result, AccessDenied):
        return None
    return result.texts
