"""
Invoker data model.

GenerationRequest is the validated, immutable input of one logical
operation. GenerationResult is its single terminal value. Attempt lives
only inside the retry loop.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Tuple, Union

from .errors import ValidationError

SUPPORTED_MODELS: Tuple[str, ...] = ("img3", "img4", "uncen", "qwen", "gemini2.0")
DEFAULT_MODEL = "img3"
MAX_PROMPT_LENGTH = 200

AttemptOutcome = Literal["success", "retryable_failure", "fatal_failure"]

FailureKind = Literal[
    "validation",
    "upstream_http",
    "upstream_shape",
    "timeout",
    "network",
    "unexpected",
    "superseded",
]


class InvokerState(str, Enum):
    """Per-operation state machine."""

    IDLE = "idle"
    ATTEMPTING = "attempting"
    BACKING_OFF = "backing_off"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str
    model: str

    @classmethod
    def create(cls, prompt: Optional[str], model: Optional[str]) -> "GenerationRequest":
        """
        Trim and validate user input.

        Raises:
            ValidationError: empty/whitespace prompt, prompt over
                MAX_PROMPT_LENGTH characters, or unknown model.
        """
        text = (prompt or "").strip()
        if not text:
            raise ValidationError("Prompt is required")
        if len(text) > MAX_PROMPT_LENGTH:
            raise ValidationError(
                f"Prompt must be at most {MAX_PROMPT_LENGTH} characters"
            )
        if not model:
            raise ValidationError("Model is required")
        if model not in SUPPORTED_MODELS:
            raise ValidationError(f"Unsupported model: {model}")
        return cls(prompt=text, model=model)

    def to_payload(self) -> dict:
        return {"prompt": self.prompt, "model": self.model}


@dataclass(frozen=True)
class Success:
    url: str
    attempts: int = 1

    ok = True


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    attempts: int = 0

    ok = False


GenerationResult = Union[Success, Failure]


@dataclass
class Attempt:
    number: int
    started_at: float
    deadline: float
    outcome: Optional[AttemptOutcome] = None
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.outcome in ("retryable_failure", "fatal_failure")
