"""GenAI span helpers for Bedrock invocations.

Wraps an invocation in an OpenTelemetry span that follows the GenAI
semantic conventions: system, operation, requested model and the
generation parameters sent with the request.
"""

from opentelemetry import trace
from typing import List, Optional
import time


class GenAISpanContext:
    """Context manager for GenAI inference spans with timing."""

    def __init__(
        self,
        model_id: str,
        region: str,
        span_name: str = "genai.invoke",
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        tracer=None,
    ):
        self.span_name = span_name
        self.model_id = model_id
        self.region = region
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._tracer = tracer or trace.get_tracer("genai")
        self.span = None
        self.start_time = None
        self._current = None

    def __enter__(self):
        # Current for the body of the block so the Bedrock call and any log
        # record emitted inside it share this trace
        self._current = self._tracer.start_as_current_span(self.span_name)
        self.span = self._current.__enter__()
        self.start_time = time.perf_counter()

        self.span.set_attribute("genai.system", "aws.bedrock")
        self.span.set_attribute("genai.operation.name", "text_completion")
        self.span.set_attribute("genai.request.model", self.model_id)
        self.span.set_attribute("cloud.region", self.region)

        if self.max_tokens is not None:
            self.span.set_attribute("genai.request.max_tokens", self.max_tokens)
        if self.temperature is not None:
            self.span.set_attribute("genai.request.temperature", self.temperature)

        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.span.set_attribute("error.type", exc_type.__name__)
            self.span.set_attribute("error.message", str(exc_val)[:200])
        return self._current.__exit__(exc_type, exc_val, exc_tb)

    def record_denied(self):
        self.span.set_attribute("error.type", "AccessDeniedException")
        self.span.set_attribute("lab.bedrock.access_denied", True)

    def record_completion(self, stop_reasons: List[Optional[str]]):
        """Record output count, finish reasons and end-to-end duration."""
        duration_ms = (time.perf_counter() - self.start_time) * 1000

        self.span.set_attribute("genai.response.outputs", len(stop_reasons))
        reasons = [r for r in stop_reasons if r]
        if reasons:
            self.span.set_attribute("genai.response.finish_reasons", reasons)
        self.span.set_attribute("lab.llm.e2e.ms", int(duration_ms))
