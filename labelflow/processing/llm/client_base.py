from abc import ABC, abstractmethod


class BaseChatClient(ABC):
    """Contract for provider-specific chat model clients used for translation."""

    @abstractmethod
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
        """Return the model's answer as plain text.

        ``timeout`` overrides the client default for this call only.
        """
