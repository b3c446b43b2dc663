"""
AI provider selection and thin chat clients.

Each task has a preferred provider. When that provider has no usable API key
the first credentialed provider is used instead, and with no credentials at
all the configured default is returned (its calls will then fail and the
callers fall back to templates).
"""
import logging
import re
from abc import ABC, abstractmethod
from enum import Enum

import anthropic
from openai import AsyncOpenAI

from designtaste.config import settings

logger = logging.getLogger(__name__)


class AIProvider(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    MISTRAL = "mistral"


class AITask(str, Enum):
    UI_ANALYSIS = "UI_ANALYSIS"
    CODE_GENERATION = "CODE_GENERATION"
    PROMPT_GENERATION = "PROMPT_GENERATION"
    IMAGE_ANALYSIS = "IMAGE_ANALYSIS"
    CODE_IMPROVEMENT = "CODE_IMPROVEMENT"


TASK_PROVIDERS = {
    AITask.UI_ANALYSIS: AIProvider.MISTRAL,
    AITask.CODE_GENERATION: AIProvider.ANTHROPIC,
    AITask.PROMPT_GENERATION: AIProvider.OPENAI,
    AITask.IMAGE_ANALYSIS: AIProvider.MISTRAL,
    AITask.CODE_IMPROVEMENT: AIProvider.ANTHROPIC,
}

PROVIDER_INFO = {
    AIProvider.OPENAI: {
        "name": "OpenAI",
        "models": {"text": "gpt-4-turbo-preview", "vision": "gpt-4o", "fast": "gpt-3.5-turbo"},
    },
    AIProvider.ANTHROPIC: {
        "name": "Anthropic Claude",
        "models": {
            "text": "claude-3-5-sonnet-20241022",
            "vision": "claude-3-5-sonnet-20241022",
            "fast": "claude-3-haiku-20240307",
        },
    },
    AIProvider.MISTRAL: {
        "name": "Mistral AI",
        "models": {"text": "mistral-large-latest", "vision": "pixtral-12b-2409", "fast": "mistral-small-latest"},
    },
}


def _api_key(provider: AIProvider) -> str:
    return {
        AIProvider.OPENAI: settings.openai_api_key,
        AIProvider.ANTHROPIC: settings.anthropic_api_key,
        AIProvider.MISTRAL: settings.mistral_api_key,
    }[provider]


def has_valid_api_key(provider: AIProvider) -> bool:
    key = _api_key(provider)
    return bool(key) and key != f"your_{provider.value}_api_key"


def get_default_provider() -> AIProvider:
    try:
        return AIProvider(settings.default_ai_provider)
    except ValueError:
        return AIProvider.OPENAI


def get_available_providers() -> list[dict]:
    return [
        {
            "id": provider.value,
            "name": info["name"],
            "supportsVision": True,
            "supportsJsonMode": True,
            "hasApiKey": has_valid_api_key(provider),
        }
        for provider, info in PROVIDER_INFO.items()
    ]


def get_optimal_provider(task: AITask) -> AIProvider:
    preferred = TASK_PROVIDERS[task]
    if has_valid_api_key(preferred):
        return preferred

    for provider in AIProvider:
        if has_valid_api_key(provider):
            logger.warning("Preferred provider %s unavailable for %s, using %s", preferred.value, task.value, provider.value)
            return provider

    default = get_default_provider()
    logger.warning("No AI providers configured for %s, using %s", task.value, default.value)
    return default


def get_recommendation(providers: list[dict]) -> str:
    configured = [p for p in providers if p["hasApiKey"]]
    if not configured:
        return "No AI providers are configured. Please add API keys to your environment variables."
    if len(configured) == 1:
        return f"Using {configured[0]['name']}. Consider adding additional providers for redundancy."
    ids = {p["id"] for p in configured}
    if AIProvider.ANTHROPIC.value in ids:
        return "Anthropic Claude is recommended for best code generation quality."
    return "OpenAI GPT-4 provides excellent vision and code generation capabilities."


def describe_provider_error(provider: AIProvider, error: Exception) -> str:
    name = PROVIDER_INFO[provider]["name"]
    message = str(error)
    lowered = message.lower()
    if "api key" in lowered:
        return f"{name} API key is invalid or missing. Please check your environment variables."
    if "rate limit" in lowered:
        return f"{name} rate limit exceeded. Please try again later."
    if "model not found" in lowered:
        return f"{name} model not available. The service may be experiencing issues."
    return f"{name} request failed: {message or 'Unknown error'}"


_DATA_URI_RE = re.compile(r"^data:(?P<media_type>[\w/+.-]+);base64,(?P<data>.+)$", re.S)


class ChatClient(ABC):
    provider: AIProvider

    def model_for(self, kind: str) -> str:
        return PROVIDER_INFO[self.provider]["models"][kind]

    @abstractmethod
    async def complete(
        self,
        system: str | None,
        prompt: str,
        image_url: str | None = None,
        model: str = "text",
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        """Send one user turn (optionally with an image) and return the reply text."""


class OpenAIChatClient(ChatClient):
    provider = AIProvider.OPENAI

    def __init__(self, api_key: str, base_url: str | None = None):
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=settings.ai_timeout_seconds)

    async def complete(self, system, prompt, image_url=None, model="text", temperature=0.7, max_tokens=2000):
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        if image_url:
            content = [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": image_url}},
            ]
        else:
            content = prompt
        messages.append({"role": "user", "content": content})

        response = await self._client.chat.completions.create(
            model=self.model_for(model),
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return response.choices[0].message.content or ""


class MistralChatClient(OpenAIChatClient):
    """Mistral through its OpenAI-compatible endpoint."""

    provider = AIProvider.MISTRAL

    def __init__(self, api_key: str):
        super().__init__(api_key, base_url=settings.mistral_base_url)


class AnthropicChatClient(ChatClient):
    provider = AIProvider.ANTHROPIC

    def __init__(self, api_key: str):
        self._client = anthropic.AsyncAnthropic(api_key=api_key, timeout=settings.ai_timeout_seconds)

    @staticmethod
    def _image_block(image_url: str) -> dict:
        match = _DATA_URI_RE.match(image_url)
        if match:
            return {
                "type": "image",
                "source": {"type": "base64", "media_type": match["media_type"], "data": match["data"]},
            }
        return {"type": "image", "source": {"type": "url", "url": image_url}}

    async def complete(self, system, prompt, image_url=None, model="text", temperature=0.7, max_tokens=2000):
        content = []
        if image_url:
            content.append(self._image_block(image_url))
        content.append({"type": "text", "text": prompt})

        kwargs = {}
        if system:
            kwargs["system"] = system
        response = await self._client.messages.create(
            model=self.model_for(model),
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[{"role": "user", "content": content}],
            **kwargs,
        )
        return "".join(block.text for block in response.content if block.type == "text")


def get_client(provider: AIProvider) -> ChatClient:
    key = _api_key(provider)
    match provider:
        case AIProvider.OPENAI:
            return OpenAIChatClient(key)
        case AIProvider.ANTHROPIC:
            return AnthropicChatClient(key)
        case AIProvider.MISTRAL:
            return MistralChatClient(key)
    raise ValueError(f"Unknown AI provider: {provider}")
