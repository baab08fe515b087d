"""OpenAI Responses API client for text translation."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from lingo_live.services.translation import TranslationClient


@dataclass
class OpenAITranslationClient(TranslationClient):
    """Translation client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAITranslationClient":
        """Create an OpenAI translation client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def translate(  # noqa: PLR0913
        self,
        *,
        model: str,
        store: bool,
        text: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": prompt,
            "input": [
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": text}],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "translation",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP client."""
        await self.client.close()
