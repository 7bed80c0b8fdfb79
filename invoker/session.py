"""
Generation session: presentation-agnostic state container.

A view observes GenerationState snapshots; it never touches the retry
loop. Overlapping generate actions follow cancel-and-supersede: the
newest action cancels the one in flight, the stale action resolves to
Failure(kind="superseded"), and only the newest action may publish its
terminal state.
"""

import asyncio
import dataclasses
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Set

from .invoker import ResilientInvoker
from .types import DEFAULT_MODEL, SUPPORTED_MODELS, Failure, GenerationResult, Success

logger = logging.getLogger(__name__)

EMPTY_PROMPT_MESSAGE = "Please enter a prompt."
GENERIC_FAILURE_MESSAGE = "Failed to generate image. Please try again."

Listener = Callable[["GenerationState"], None]


@dataclass(frozen=True)
class GenerationState:
    prompt: str = ""
    model: str = DEFAULT_MODEL
    is_loading: bool = False
    image_url: str = ""
    error: Optional[str] = None
    action_id: int = 0


class GenerationSession:
    """
    Holds the UI-facing state and drives the invoker for each action.

    Every call to generate() is one user action and resolves to exactly
    one GenerationResult.
    """

    def __init__(self, invoker: ResilientInvoker, model: str = DEFAULT_MODEL):
        self.invoker = invoker
        self._state = GenerationState(model=model)
        self._listeners: List[Listener] = []
        self._current: Optional[asyncio.Task] = None
        self._superseded: Set[asyncio.Task] = set()

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def models(self) -> tuple:
        return SUPPORTED_MODELS

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_prompt(self, prompt: str) -> None:
        self._publish(prompt=prompt)

    def select_model(self, model: str) -> None:
        if model not in SUPPORTED_MODELS:
            raise ValueError(f"Unsupported model: {model}")
        self._publish(model=model)

    async def generate(self) -> GenerationResult:
        """
        Start a new action, superseding any action still in flight.
        """
        if not self._state.prompt.strip():
            self._publish(error=EMPTY_PROMPT_MESSAGE, image_url="", is_loading=False)
            return Failure(kind="validation", message="Prompt is required", attempts=0)

        stale = self._current
        if stale is not None and not stale.done():
            logger.info(f"Superseding generate action {self._state.action_id}")
            self._superseded.add(stale)
            stale.cancel()

        action_id = self._state.action_id + 1
        self._publish(action_id=action_id, is_loading=True, error=None, image_url="")

        task = asyncio.ensure_future(
            self.invoker.generate(self._state.prompt, self._state.model)
        )
        self._current = task

        try:
            result = await task
        except asyncio.CancelledError:
            if task not in self._superseded:
                raise
            return Failure(
                kind="superseded",
                message="Superseded by a newer generate action",
                attempts=0,
            )
        finally:
            self._superseded.discard(task)
            if self._current is task:
                self._current = None

        if action_id == self._state.action_id:
            if isinstance(result, Success):
                self._publish(is_loading=False, image_url=result.url, error=None)
            elif result.kind == "validation":
                self._publish(is_loading=False, image_url="", error=result.message)
            else:
                self._publish(is_loading=False, image_url="", error=GENERIC_FAILURE_MESSAGE)
        return result

    def _publish(self, **changes) -> None:
        self._state = dataclasses.replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)
