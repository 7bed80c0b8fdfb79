from abc import ABC, abstractmethod

from .types import GenerationRequest


class GatewayTransport(ABC):
    """
    Abstract gateway boundary.
    The invoker depends ONLY on this interface.
    """

    @abstractmethod
    async def send(self, request: GenerationRequest) -> str:
        """
        Perform one round trip and return the image URL.

        Raises:
            InvocationError subclasses on any failed attempt.
        """
        raise NotImplementedError
