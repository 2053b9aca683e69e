"""Outcome of a single invocation.

A call either produces completions (possibly none) or is denied access to
the model. Callers can tell "zero completions" apart from "denied" without
inspecting exceptions; every other failure is raised.
"""

from dataclasses import dataclass, field
from typing import List, Union


@dataclass(frozen=True)
class Completions:
    """Model output texts, in the order the service returned them."""
    texts: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AccessDenied:
    """The caller lacks permission to invoke ``model_id``."""
    model_id: str

    @property
    def message(self) -> str:
        return (
            "Access denied. Ensure you have the correct permissions "
            f"to invoke {self.model_id}."
        )


InvocationResult = Union[Completions, AccessDenied]
