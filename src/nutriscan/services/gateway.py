"""AI gateway boundary shared by analysis, plan, translation and chat services."""

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Protocol, TypeVar

from pydantic import BaseModel

from nutriscan.domain.errors import GatewayError

_logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class GatewayClient(Protocol):
    """Interface for LLM structured-output and streaming calls."""

    async def generate_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema_name: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Return a JSON object conforming to the schema."""

    def stream_text(
        self,
        *,
        model: str,
        instructions: str,
        messages: list[dict[str, str]],
    ) -> AsyncIterator[str]:
        """Yield text chunks of a conversational reply."""


def strict_object(properties: dict[str, object]) -> dict[str, object]:
    """Build a strict JSON schema object requiring every property."""
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


@dataclass
class AIGateway:
    """Validated request/response wrapper around a gateway client."""

    client: GatewayClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def generate(  # noqa: PLR0913
        self,
        *,
        prompt: str,
        schema_name: str,
        schema: dict[str, object],
        response_model: type[ModelT],
        failure_message: str,
        image_data_url: str | None = None,
    ) -> ModelT:
        """Call the client and validate the payload, or raise GatewayError."""
        try:
            raw = await self.client.generate_json(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
                schema_name=schema_name,
                schema=schema,
                image_data_url=image_data_url,
            )
            return response_model.model_validate(raw)
        except Exception as exc:
            _logger.exception("Gateway request %s failed", schema_name)
            raise GatewayError(failure_message) from exc

    def stream_chat(
        self, *, instructions: str, messages: list[dict[str, str]]
    ) -> AsyncIterator[str]:
        """Stream a chat reply from the client."""
        return self.client.stream_text(
            model=self.model,
            instructions=instructions,
            messages=messages,
        )
