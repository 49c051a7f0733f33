"""OpenAI Responses API client for structured outputs and chat streaming."""

import json
from collections.abc import AsyncIterator
from dataclasses import dataclass

from openai import AsyncOpenAI

from nutriscan.services.gateway import GatewayClient


@dataclass
class OpenAIGatewayClient(GatewayClient):
    """Gateway client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIGatewayClient":
        """Create an OpenAI gateway client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

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
        """Call OpenAI Responses API with structured outputs."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        if image_data_url:
            content.append({"type": "input_image", "image_url": image_data_url})
        request_payload: dict[str, object] = {
            "model": model,
            "input": [{"role": "user", "content": content}],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def stream_text(
        self,
        *,
        model: str,
        instructions: str,
        messages: list[dict[str, str]],
    ) -> AsyncIterator[str]:
        """Stream output text deltas for a conversation."""
        stream = await self.client.responses.create(
            model=model,
            instructions=instructions,
            input=messages,
            stream=True,
        )
        async for event in stream:
            if event.type == "response.output_text.delta":
                yield event.delta
            elif event.type in {"response.failed", "error"}:
                raise RuntimeError("OpenAI chat stream failed")
