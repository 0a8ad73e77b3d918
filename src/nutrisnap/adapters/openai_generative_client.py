"""OpenAI Responses API client for prompt and image analysis."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from nutrisnap.services.analysis import GenerativeClient


@dataclass
class OpenAIGenerativeClient(GenerativeClient):
    """Generative client backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, timeout_seconds: float) -> "OpenAIGenerativeClient":
        """Create an OpenAI client with an explicit request deadline."""
        return cls(client=AsyncOpenAI(api_key=api_key, timeout=timeout_seconds))

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        image_data_url: str | None = None,
    ) -> str:
        """Send the prompt (and image, if any) and return the output text."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        if image_data_url:
            content.append({"type": "input_image", "image_url": image_data_url})

        response = await self.client.responses.create(
            model=model,
            input=[{"role": "user", "content": content}],
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text
