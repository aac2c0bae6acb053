"""
Abstract base class for model invocation adapters.

The core never talks to a model server directly. Adapters implement this
interface so the ModelRouter can call any backend and feed latency and
success back into the model registry.
"""

from abc import ABC, abstractmethod
from typing import Optional

from tutorcore.inference.models import ModelDescriptor


class ModelInvoker(ABC):
    """Model invocation capability.

    Implementations must raise BackendUnavailable when the backend cannot
    serve the request and InvocationTimeout when it does not answer in time.
    """

    @abstractmethod
    async def invoke(self, descriptor: ModelDescriptor, prompt: str,
                     generation_config: Optional[dict] = None) -> str:
        """Generate text for a prompt with the given model.

        Args:
            descriptor: The routed model.
            prompt: User-facing prompt text.
            generation_config: Overrides for max_tokens, temperature, top_p.

        Returns:
            The generated text.
        """
        ...
