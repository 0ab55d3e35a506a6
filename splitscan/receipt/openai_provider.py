import asyncio
import logging

from agents import Agent, AgentsException, OpenAIResponsesModel, RunConfig, Runner
from openai import AsyncOpenAI, OpenAIError

from splitscan.receipt.base import RawImage
from splitscan.receipt.errors import ServiceError
from splitscan.receipt.progress import ProgressReporter, Stage

logger = logging.getLogger("splitscan")

SYSTEM_INSTRUCTIONS = "You are a receipt parser. Answer with a single JSON object and nothing else."


class OpenAIReceiptExtractor:
    """Receipt extraction using OpenAI Agents SDK with a vision model.

    One request per call, no retries. The image is sent inline as a data URL
    and is not kept after the call returns.
    """

    def __init__(self, api_key: str | None, model: str = "gpt-4o", timeout: float | None = 30.0):
        self.model = model
        self.timeout = timeout
        self._agent: Agent | None = None
        if api_key:
            self._agent = Agent(
                name="Receipt Scanner",
                instructions=SYSTEM_INSTRUCTIONS,
                model=OpenAIResponsesModel(model=model, openai_client=AsyncOpenAI(api_key=api_key)),
            )

    async def extract(
        self,
        image: RawImage,
        prompt: str,
        progress: ProgressReporter | None = None,
    ) -> str:
        if self._agent is None:
            raise ServiceError("OPENAI_API_KEY is not configured")

        image_url = image.data_uri()
        if progress is not None:
            progress.report(Stage.IMAGE_ENCODED)

        run = Runner.run(
            self._agent,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {"type": "input_image", "image_url": image_url, "detail": "auto"},
                    ],
                }
            ],
            # Keep the image out of trace exports
            run_config=RunConfig(tracing_disabled=True),
        )
        try:
            result = await asyncio.wait_for(run, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise ServiceError(f"Receipt extraction timed out after {self.timeout}s") from e
        except (AgentsException, OpenAIError, OSError) as e:
            raise ServiceError(f"Receipt extraction request failed: {e}") from e
        except Exception as e:
            raise ServiceError(f"Receipt extraction failed unexpectedly: {type(e).__name__}: {e}") from e

        text = result.final_output
        if not isinstance(text, str) or not text.strip():
            raise ServiceError("Receipt extraction returned no text")

        logger.debug("Receipt extraction raw output", extra={"extra_data": {"model": self.model, "raw": text[:2000]}})
        return text
