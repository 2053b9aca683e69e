"""Amazon Bedrock client for Mistral instruct models."""

from invoker.config import InvokerConfig
from invoker.invoker import InferenceInvoker, invoke_mixtral_8x7b
from invoker.results import AccessDenied, Completions, InvocationResult

__all__ = [
    "AccessDenied",
    "Completions",
    "InferenceInvoker",
    "InvocationResult",
    "InvokerConfig",
    "invoke_mixtral_8x7b",
]
