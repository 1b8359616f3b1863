import base64

import httpx
import openai

from kycdoc.ocr.base import BaseTextExtractor
from kycdoc.ocr.exceptions import ExtractionServiceError, NoTextDetectedError

_NO_TEXT_MARKER = "NO_TEXT"

_TRANSCRIBE_PROMPT = (
    "Transcribe every piece of printed text in this identity document image, "
    "line by line, exactly as written. Do not summarize, translate or add "
    f"commentary. If the image contains no readable text, reply with {_NO_TEXT_MARKER}."
)


class OpenAIVisionAdapter(BaseTextExtractor):
    """OCR through an OpenAI-compatible vision chat completion."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._model = model
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def extract(self, image_bytes: bytes) -> str:
        data_url = "data:image/jpeg;base64," + base64.b64encode(image_bytes).decode("ascii")
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=0.0,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": _TRANSCRIBE_PROMPT},
                            {"type": "image_url", "image_url": {"url": data_url}},
                        ],
                    }
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionServiceError(f"OCR provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ExtractionServiceError(f"OCR provider API error: {exc}") from exc

        if not response.choices:
            raise ExtractionServiceError("OCR provider returned no choices")
        content = (response.choices[0].message.content or "").strip()
        if not content or content == _NO_TEXT_MARKER:
            raise NoTextDetectedError(
                "No text detected in the image. Please ensure the document is clear and readable."
            )
        return content
