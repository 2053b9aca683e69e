"""Demo harness: ``python -m invoker [prompt]``."""

import argparse
import asyncio
import sys

from invoker.config import InvokerConfig
from invoker.invoker import InferenceInvoker
from invoker.results import AccessDenied
from invoker.telemetry import setup_telemetry

DEFAULT_PROMPT = 'Complete the following: "Once upon a time..."'


def render(prompt: str, completions) -> str:
    lines = ["", "Model: Mixtral 8x7B", f"Prompt: {prompt}"]
    for completion in completions:
        lines.extend(["Completion:", completion, "\n"])
    return "\n".join(lines)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Invoke Mixtral 8x7B on Amazon Bedrock")
    parser.add_argument("prompt", nargs="*", help="prompt text (default: a story opener)")
    args = parser.parse_args(argv)
    prompt = " ".join(args.prompt) or DEFAULT_PROMPT

    setup_telemetry("invoker-demo")
    invoker = InferenceInvoker(InvokerConfig.from_env())
    result = asyncio.run(invoker.invoke(prompt))
    if isinstance(result, AccessDenied):
        return 1

    print(render(prompt, result.texts))
    return 0


if __name__ == "__main__":
    sys.exit(main())
