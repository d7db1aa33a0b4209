from chathotel.services.llm.base import LLMError, LLMProvider, LLMResponse
from chathotel.services.llm.openai_provider import OpenAIProvider

__all__ = ["LLMError", "LLMProvider", "LLMResponse", "OpenAIProvider"]
