"""
OpenAI-compatible model invocation adapter.

Covers any server that implements /v1/chat/completions (LM Studio, vLLM,
llama.cpp server, hosted gateways). The descriptor's endpoint wins over the
adapter's base_url so one adapter can serve models spread across servers.
"""

import logging
from typing import Optional

import httpx

from tutorcore.config import DEFAULT_INVOKE_TIMEOUT
from tutorcore.errors import BackendUnavailable, InvocationTimeout
from tutorcore.inference.base import ModelInvoker
from tutorcore.inference.models import ModelDescriptor

logger = logging.getLogger(__name__)


class OpenAICompatInvoker(ModelInvoker):
    """Invokes models through an OpenAI-compatible chat completions API."""

    def __init__(self, base_url: str = "http://localhost:1234",
                 default_timeout: float = DEFAULT_INVOKE_TIMEOUT,
                 api_key: Optional[str] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.default_timeout = default_timeout
        self._api_key = api_key
        self._transport = transport

    def _build_payload(self, descriptor: ModelDescriptor, prompt: str,
                       generation_config: Optional[dict]) -> dict:
        gen = descriptor.generation
        overrides = generation_config or {}
        return {
            "model": descriptor.name,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": overrides.get("max_tokens", gen.max_tokens),
            "temperature": overrides.get("temperature", gen.temperature),
            "top_p": overrides.get("top_p", gen.top_p),
        }

    async def invoke(self, descriptor: ModelDescriptor, prompt: str,
                     generation_config: Optional[dict] = None) -> str:
        base = (descriptor.generation.endpoint or self.base_url).rstrip("/")
        url = f"{base}/v1/chat/completions"
        payload = self._build_payload(descriptor, prompt, generation_config)
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
        timeout = (generation_config or {}).get("timeout", self.default_timeout)

        try:
            async with httpx.AsyncClient(timeout=timeout,
                                         transport=self._transport) as client:
                resp = await client.post(url, json=payload, headers=headers)
                resp.raise_for_status()
                data = resp.json()
        except httpx.TimeoutException as e:
            raise InvocationTimeout(
                f"Model {descriptor.name} timed out after {timeout}s",
                stage="invoke", model=descriptor.name, endpoint=base,
            ) from e
        except httpx.HTTPError as e:
            raise BackendUnavailable(
                f"Model backend for {descriptor.name} failed: {e}",
                stage="invoke", model=descriptor.name, endpoint=base,
            ) from e
        except ValueError as e:
            raise BackendUnavailable(
                f"Model backend for {descriptor.name} returned invalid JSON",
                stage="invoke", model=descriptor.name, endpoint=base,
            ) from e

        try:
            return data["choices"][0]["message"].get("content") or ""
        except (KeyError, IndexError, TypeError) as e:
            raise BackendUnavailable(
                f"Malformed completion from {descriptor.name}",
                stage="invoke", model=descriptor.name, endpoint=base,
            ) from e
