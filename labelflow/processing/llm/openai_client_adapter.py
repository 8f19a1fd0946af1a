from typing import Any

import httpx
import openai

from labelflow.processing.exceptions import ProcessingNetworkError, ProcessingResponseError
from labelflow.processing.llm.client_base import BaseChatClient


class OpenAIChatClientAdapter(BaseChatClient):
    """Label translation through an OpenAI-compatible chat completions API.

    Provider failures surface as processing errors: transport problems and
    timeouts as ProcessingNetworkError, rejected requests (with their status
    code) and unusable answers as ProcessingResponseError.
    """

    SCHEMA_NAME = "label_translation"

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
        timeout: float | None = None,
    ) -> str:
        options: dict[str, Any] = {}
        if timeout is not None:
            options["timeout"] = timeout
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": self.SCHEMA_NAME,
                        "strict": False,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                **options,
            )
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise ProcessingNetworkError(f"Translation model timed out: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise ProcessingNetworkError(f"Translation model network error: {exc}") from exc
        except openai.APIStatusError as exc:
            raise ProcessingResponseError(
                f"Translation model returned {exc.status_code}: {exc.message}",
                status_code=exc.status_code,
            ) from exc
        except openai.APIError as exc:
            raise ProcessingNetworkError(f"Translation model API error: {exc}") from exc

        if not response.choices:
            raise ProcessingResponseError("Translation model returned no choices")
        choice = response.choices[0]
        refusal = getattr(choice.message, "refusal", None)
        if isinstance(refusal, str) and refusal:
            raise ProcessingResponseError(f"Translation model refused the label: {refusal}")
        if choice.finish_reason == "length":
            raise ProcessingResponseError(
                "Translation model output was truncated; the label is too long for one answer"
            )
        content = choice.message.content
        if content is None:
            raise ProcessingResponseError("Translation model returned empty response")
        return content
