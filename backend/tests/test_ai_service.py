import asyncio
import json

import pytest

from designtaste.config import settings
from designtaste.services import ai_service
from designtaste.services.ai_providers import (
    AIProvider,
    AITask,
    AnthropicChatClient,
    describe_provider_error,
    get_available_providers,
    get_client,
    get_optimal_provider,
    get_recommendation,
    has_valid_api_key,
)
from designtaste.services.fallback_templates import FALLBACK_COMPONENT_CODE, VARIATION_IMAGES

from conftest import FakeChatClient


@pytest.fixture
def api_keys(monkeypatch):
    """Set provider keys per test: ``api_keys(openai="sk-...")``."""

    def set_keys(**keys):
        for provider in AIProvider:
            monkeypatch.setattr(settings, f"{provider.value}_api_key", keys.get(provider.value, ""))

    set_keys()
    return set_keys


class TestProviderSelection:
    def test_preferred_provider_when_configured(self, api_keys):
        api_keys(openai="sk-1", anthropic="sk-2", mistral="sk-3")
        assert get_optimal_provider(AITask.CODE_GENERATION) is AIProvider.ANTHROPIC
        assert get_optimal_provider(AITask.UI_ANALYSIS) is AIProvider.MISTRAL
        assert get_optimal_provider(AITask.PROMPT_GENERATION) is AIProvider.OPENAI

    def test_falls_back_to_first_configured(self, api_keys):
        api_keys(mistral="sk-3")
        assert get_optimal_provider(AITask.CODE_GENERATION) is AIProvider.MISTRAL

    def test_placeholder_key_is_not_valid(self, api_keys):
        api_keys(anthropic="your_anthropic_api_key", openai="sk-1")
        assert not has_valid_api_key(AIProvider.ANTHROPIC)
        assert get_optimal_provider(AITask.CODE_IMPROVEMENT) is AIProvider.OPENAI

    def test_default_when_nothing_configured(self, api_keys, monkeypatch):
        monkeypatch.setattr(settings, "default_ai_provider", "anthropic")
        assert get_optimal_provider(AITask.UI_ANALYSIS) is AIProvider.ANTHROPIC

    def test_unknown_default_is_openai(self, api_keys, monkeypatch):
        monkeypatch.setattr(settings, "default_ai_provider", "gemini")
        assert get_optimal_provider(AITask.UI_ANALYSIS) is AIProvider.OPENAI

    def test_available_providers(self, api_keys):
        api_keys(anthropic="sk-2")
        providers = {p["id"]: p for p in get_available_providers()}
        assert set(providers) == {"openai", "anthropic", "mistral"}
        assert providers["anthropic"]["hasApiKey"] is True
        assert providers["openai"]["hasApiKey"] is False


def test_recommendation_text():
    none = [{"id": "openai", "name": "OpenAI", "hasApiKey": False}]
    assert get_recommendation(none).startswith("No AI providers are configured")
    one = [{"id": "openai", "name": "OpenAI", "hasApiKey": True}]
    assert get_recommendation(one).startswith("Using OpenAI.")
    two = [
        {"id": "openai", "name": "OpenAI", "hasApiKey": True},
        {"id": "anthropic", "name": "Anthropic Claude", "hasApiKey": True},
    ]
    assert get_recommendation(two).startswith("Anthropic Claude is recommended")


def test_describe_provider_error():
    assert "API key is invalid" in describe_provider_error(AIProvider.OPENAI, Exception("Incorrect API key"))
    assert "rate limit exceeded" in describe_provider_error(AIProvider.MISTRAL, Exception("Rate limit hit"))
    assert describe_provider_error(AIProvider.ANTHROPIC, Exception("boom")) == "Anthropic Claude request failed: boom"


def test_get_client_builds_provider_client():
    client = get_client(AIProvider.ANTHROPIC)
    assert isinstance(client, AnthropicChatClient)
    assert client.model_for("fast") == "claude-3-haiku-20240307"
    assert get_client(AIProvider.MISTRAL).provider is AIProvider.MISTRAL


def test_anthropic_image_blocks():
    block = AnthropicChatClient._image_block("data:image/png;base64,AAAA")
    assert block["source"] == {"type": "base64", "media_type": "image/png", "data": "AAAA"}
    block = AnthropicChatClient._image_block("https://img.example/a.png")
    assert block["source"] == {"type": "url", "url": "https://img.example/a.png"}


CODE_JSON = {
    "tailwindCode": "<div class='p-4'></div>",
    "reactCode": "export const Hero = () => null",
    "cssCode": ".hero {}",
    "description": "Hero",
    "features": ["Responsive"],
}


class TestGenerateCode:
    def test_parses_json_reply(self):
        client = FakeChatClient("```json\n" + json.dumps(CODE_JSON) + "\n```")
        code = asyncio.run(ai_service.generate_code_from_inspiration("https://img/x.png", "hero", client=client))
        assert code["reactCode"] == "export const Hero = () => null"
        assert code["responsive"] is True
        assert code["animations"] == []
        assert client.calls[0]["image_url"] == "https://img/x.png"
        assert client.calls[0]["model"] == "vision"

    def test_invalid_reply_uses_template(self):
        client = FakeChatClient('{"description": "missing code fields"}')
        code = asyncio.run(ai_service.generate_code_from_inspiration("https://img/x.png", "form", client=client))
        assert code["reactCode"] == FALLBACK_COMPONENT_CODE["form"]["reactCode"]

    def test_provider_error_uses_button_template_for_unknown_type(self):
        client = FakeChatClient(RuntimeError("Incorrect API key"))
        code = asyncio.run(ai_service.generate_code_from_inspiration("https://img/x.png", "hero", client=client))
        assert code["description"] == FALLBACK_COMPONENT_CODE["button"]["description"]

    def test_template_is_a_copy(self):
        client = FakeChatClient(RuntimeError("down"))
        code = asyncio.run(ai_service.generate_code_from_inspiration("u", "button", client=client))
        code["features"].append("mutated")
        assert "mutated" not in FALLBACK_COMPONENT_CODE["button"]["features"]


class TestGeneratePrompt:
    def test_reply_is_stripped(self):
        client = FakeChatClient("  Build a hero with a bold headline.\n")
        prompt = asyncio.run(ai_service.generate_prompt_from_inspiration("u", "hero", client=client))
        assert prompt == "Build a hero with a bold headline."

    def test_failure_uses_fallback(self):
        client = FakeChatClient(RuntimeError("down"))
        prompt = asyncio.run(ai_service.generate_prompt_from_inspiration("u", "navigation", client=client))
        assert prompt.startswith("Build a navigation menu")

    def test_empty_reply_uses_fallback(self):
        prompt = asyncio.run(ai_service.generate_prompt_from_inspiration("u", "widget", client=FakeChatClient("")))
        assert prompt.startswith("Create a modern widget component")


class TestImproveCode:
    def test_returns_reply(self):
        client = FakeChatClient("const improved = true")
        code = asyncio.run(ai_service.improve_existing_code("const a = 1", "make it better", "card", client=client))
        assert code == "const improved = true"
        assert "Improvement request: make it better" in client.calls[0]["prompt"]

    def test_failure_returns_original(self):
        client = FakeChatClient(RuntimeError("down"))
        code = asyncio.run(ai_service.improve_existing_code("const a = 1", "x", "card", client=client))
        assert code == "const a = 1"


class TestVariations:
    def test_images_attached_in_order(self):
        reply = json.dumps(
            {
                "variations": [
                    {"title": "A", "description": "a", "changes": ["x"], "designRationale": "r"},
                    {"title": "B", "description": "b"},
                    {"title": "C", "description": "c"},
                ]
            }
        )
        variations, fallback = asyncio.run(ai_service.generate_variations("u", "card", client=FakeChatClient(reply)))
        assert fallback is False
        assert [v["imageUrl"] for v in variations] == [VARIATION_IMAGES[0], VARIATION_IMAGES[1], VARIATION_IMAGES[0]]
        assert variations[0]["designRationale"] == "r"

    def test_no_variations_uses_fallback(self):
        variations, fallback = asyncio.run(
            ai_service.generate_variations("u", None, client=FakeChatClient('{"variations": []}'))
        )
        assert fallback is True
        assert [v["title"] for v in variations] == ["Modern Component Design", "Bold Component Variant"]

    def test_provider_error_uses_fallback(self):
        variations, fallback = asyncio.run(
            ai_service.generate_variations("u", "form", client=FakeChatClient(RuntimeError("down")))
        )
        assert fallback is True
        assert variations[0]["title"] == "Modern form Design"


class TestAnalyzeElementImage:
    def test_two_calls(self):
        client = FakeChatClient(" Make the CTA stand out \n", "button\n")
        result = asyncio.run(ai_service.analyze_element_image("u", {"tagName": "BUTTON"}, client=client))
        assert result == {"suggestedPrompt": "Make the CTA stand out", "componentType": "button", "fallback": False}
        assert len(client.calls) == 2

    @pytest.mark.parametrize(
        "tag, expected_type",
        [("NAV", "navigation"), ("ARTICLE", "content area"), ("SPAN", "component"), (None, "component")],
    )
    def test_fallback_by_tag(self, tag, expected_type):
        client = FakeChatClient(RuntimeError("down"))
        result = asyncio.run(ai_service.analyze_element_image("u", {"tagName": tag}, client=client))
        assert result["fallback"] is True
        assert result["componentType"] == expected_type


class TestGenerateElementCode:
    ANALYSIS = {
        "component_type": "card",
        "design_issues": ["Insufficient padding - element may feel cramped"],
        "recommendations": ["Add subtle shadows for depth (shadow-md)"],
    }

    def test_prompt_contents(self):
        prompt = ai_service.build_code_generation_prompt(
            {"tagName": "DIV", "textContent": "x" * 300},
            self.ANALYSIS,
            [{"title": "Feature Cards Layout", "tags": ["card", "grid"]}],
            "nextjs",
            ["minimal", "dark"],
        )
        assert "- Content: " + "x" * 200 + "\n" in prompt
        assert "- Component Type: card" in prompt
        assert "DESIGN ISSUES IDENTIFIED:\n- Insufficient padding" in prompt
        assert "STYLE PREFERENCES:\nminimal, dark" in prompt
        assert "- Use Next.js 14 with App Router" in prompt
        assert "- Feature Cards Layout: card, grid" in prompt

    def test_prompt_without_analysis_or_inspirations(self):
        prompt = ai_service.build_code_generation_prompt({"tagName": "P"}, None, [], "react", [])
        assert "- Component Type: component" in prompt
        assert "DESIGN INSPIRATIONS TO CONSIDER:" not in prompt
        assert "Next.js" not in prompt

    def test_failure_returns_mock(self):
        client = FakeChatClient(RuntimeError("down"))
        result = asyncio.run(
            ai_service.generate_element_code({"tagName": "SPAN", "textContent": "Hi"}, None, [], client=client)
        )
        assert "export function ImprovedComponent()" in result["code"]
        assert "<span" in result["code"]
        assert result["description"] == "Improved component with better styling and accessibility"

    def test_unstructured_reply_gives_empty_fields(self):
        result = asyncio.run(
            ai_service.generate_element_code({"tagName": "DIV"}, None, [], client=FakeChatClient("just text"))
        )
        assert result == {"code": "", "description": "", "improvements": []}
