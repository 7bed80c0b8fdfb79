import asyncio
from typing import Iterable, List, Union

from .base import GatewayTransport
from .types import GenerationRequest

ScriptStep = Union[str, BaseException, float]


class StubGatewayTransport(GatewayTransport):
    """
    Deterministic fake gateway for testing and offline runs.

    Replays a script, one step per call:
      - str            -> returned as the image URL
      - BaseException  -> raised
      - float          -> sleep that many seconds, then take the next step
                          (used to simulate slow attempts)

    Once the script is exhausted the last step repeats.
    """

    def __init__(self, script: Iterable[ScriptStep]):
        self._script: List[ScriptStep] = list(script)
        if not self._script:
            raise ValueError("script must contain at least one step")
        self._position = 0
        self.calls: List[GenerationRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def _next_step(self) -> ScriptStep:
        index = min(self._position, len(self._script) - 1)
        self._position += 1
        return self._script[index]

    async def send(self, request: GenerationRequest) -> str:
        self.calls.append(request)
        step = self._next_step()
        while isinstance(step, float):
            await asyncio.sleep(step)
            step = self._next_step()
        if isinstance(step, BaseException):
            raise step
        return step
