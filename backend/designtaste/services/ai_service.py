"""
AI-backed generation: component code, recreation prompts, design variations,
element suggestions and per-element improved code.

Every public coroutine accepts an optional ``client`` so callers (and tests)
can supply their own ``ChatClient``; otherwise the task's optimal provider is
used. Provider failures are logged and replaced by deterministic templates,
except ``improve_existing_code`` which returns the code unchanged.
"""
import json
import logging

from pydantic import ValidationError

from designtaste.schemas.ai import ComponentCode, DesignVariation
from designtaste.services.ai_providers import (
    AITask,
    ChatClient,
    describe_provider_error,
    get_client,
    get_optimal_provider,
)
from designtaste.services.fallback_templates import (
    VARIATION_IMAGES,
    fallback_component_code,
    fallback_element_suggestion,
    fallback_prompt,
    fallback_variations,
    mock_element_code,
)
from designtaste.services.response_parser import CodeResponseParser, MarkdownSectionParser, extract_json_object

logger = logging.getLogger(__name__)

CODE_SYSTEM_PROMPT = """You are an expert UI/UX developer who can analyze design images and generate high-quality, production-ready code.

CONTEXT:
- Component Type: {component_type}
- User Request: {user_prompt}
- Original Element: {original}

TASK:
Analyze the design inspiration image and generate:
1. Modern Tailwind CSS component code
2. React TypeScript component
3. Pure CSS alternative
4. Detailed description and features

REQUIREMENTS:
- Use modern Tailwind CSS classes
- Include hover states and transitions
- Make it responsive (mobile-first)
- Follow accessibility best practices
- Use semantic HTML
- Include proper TypeScript types

STYLE GUIDELINES:
- Use consistent spacing (4, 6, 8, 12, 16, 24)
- Rounded corners (rounded-lg, rounded-xl)
- Subtle shadows (shadow-sm, shadow-md)
- Proper contrast ratios

OUTPUT FORMAT:
Reply with a single JSON object with the keys tailwindCode, reactCode, cssCode,
description, features (list), accessibility (list), responsive (bool) and
animations (list). No prose outside the JSON."""

PROMPT_SYSTEM_PROMPT = """You are a UI/UX design expert. Analyze the provided image and create a detailed, actionable prompt that a developer could use to recreate this {component_type} design.

The prompt should include:
- Layout structure and positioning
- Color scheme and styling
- Typography and spacing
- Interactive elements and states
- Responsive behavior
- Animation effects
- Accessibility considerations

Make the prompt specific, actionable, and professional."""

IMPROVE_SYSTEM_PROMPT = """You are an expert frontend developer. Improve the provided {component_type} code based on the user's request.

Focus on modern best practices, performance, accessibility, readability and responsive design.

Return only the improved code, properly formatted."""

VARIATIONS_PROMPT = """Analyze this {component_type} design and create 2 distinct design variations. For each variation, provide:
1. A creative title
2. A detailed description of what makes it different
3. A list of specific changes from the original
4. Design rationale explaining why this variation would be effective

Make each variation meaningfully different from the original and from each other.

Reply with a JSON object {{"variations": [{{"title", "description", "changes", "designRationale"}}]}} and nothing else."""

SUGGESTION_PROMPT = """Analyze this UI element and suggest a descriptive prompt that a user might want to improve about it.

Provide a helpful suggestion in this format:
"Improve this [component type] by [specific improvement suggestion]"

Be specific but concise (under 100 characters). The user should be able to edit/complete your suggestion.

HTML context: {tag_name}"""

COMPONENT_TYPE_PROMPT = (
    'What type of UI component is this? Respond with just the component name (e.g., "hero section", '
    '"button", "navigation", "card", "form", "footer", etc.).'
)

ELEMENT_CODE_SYSTEM_PROMPT = (
    "You are an expert frontend developer specializing in creating beautiful, accessible, and performant "
    "UI components. You generate clean, production-ready code with proper TypeScript types and modern "
    "best practices."
)


def _client_for(task: AITask, client: ChatClient | None) -> ChatClient:
    return client or get_client(get_optimal_provider(task))


def _log_failure(action: str, client: ChatClient, exc: Exception):
    logger.error("%s failed: %s", action, describe_provider_error(client.provider, exc))


async def generate_code_from_inspiration(
    image_url: str,
    component_type: str,
    user_prompt: str | None = None,
    original_element_data: dict | None = None,
    client: ChatClient | None = None,
) -> dict:
    client = _client_for(AITask.CODE_GENERATION, client)
    system = CODE_SYSTEM_PROMPT.format(
        component_type=component_type,
        user_prompt=user_prompt or "Recreate this design",
        original=json.dumps(original_element_data, indent=2) if original_element_data else "None",
    )
    try:
        reply = await client.complete(
            system,
            f"Please analyze this {component_type} design and generate production-ready code. "
            "Focus on recreating the visual style, layout, and interactions shown in the image.",
            image_url=image_url,
            model="vision",
            temperature=0.3,
            max_tokens=4000,
        )
        return ComponentCode.model_validate(extract_json_object(reply)).model_dump(by_alias=True)
    except (ValueError, ValidationError) as exc:
        logger.warning("Unusable code generation reply for %s: %s", component_type, exc)
    except Exception as exc:
        _log_failure("AI code generation", client, exc)
    return fallback_component_code(component_type)


async def generate_prompt_from_inspiration(
    image_url: str, component_type: str, client: ChatClient | None = None
) -> str:
    client = _client_for(AITask.PROMPT_GENERATION, client)
    try:
        reply = await client.complete(
            PROMPT_SYSTEM_PROMPT.format(component_type=component_type),
            f"Analyze this {component_type} design and create a detailed prompt for recreating it:",
            image_url=image_url,
            model="vision",
            temperature=0.4,
        )
    except Exception as exc:
        _log_failure("AI prompt generation", client, exc)
        return fallback_prompt(component_type)
    return reply.strip() or fallback_prompt(component_type)


async def improve_existing_code(
    current_code: str, improvement_request: str, component_type: str, client: ChatClient | None = None
) -> str:
    client = _client_for(AITask.CODE_IMPROVEMENT, client)
    prompt = (
        f"Current code:\n```\n{current_code}\n```\n\n"
        f"Improvement request: {improvement_request}\n\n"
        "Please provide the improved version:"
    )
    try:
        return await client.complete(
            IMPROVE_SYSTEM_PROMPT.format(component_type=component_type), prompt, temperature=0.2
        )
    except Exception as exc:
        _log_failure("Code improvement", client, exc)
        return current_code


async def generate_variations(
    image_url: str, component_type: str | None = None, client: ChatClient | None = None
) -> tuple[list[dict], bool]:
    """Returns ``(variations, used_fallback)``."""
    client = _client_for(AITask.IMAGE_ANALYSIS, client)
    try:
        reply = await client.complete(
            None,
            VARIATIONS_PROMPT.format(component_type=component_type or "component"),
            image_url=image_url,
            model="vision",
        )
        raw = extract_json_object(reply).get("variations") or []
        variations = [DesignVariation.model_validate(v).model_dump(by_alias=True) for v in raw]
        if not variations:
            raise ValueError("No variations in response")
    except (ValueError, ValidationError) as exc:
        logger.warning("Unusable variations reply: %s", exc)
        return fallback_variations(component_type), True
    except Exception as exc:
        _log_failure("Variations generation", client, exc)
        return fallback_variations(component_type), True

    for index, variation in enumerate(variations):
        variation["imageUrl"] = VARIATION_IMAGES[index % len(VARIATION_IMAGES)]
    return variations, False


async def analyze_element_image(
    image_url: str, element_data: dict | None = None, client: ChatClient | None = None
) -> dict:
    client = _client_for(AITask.UI_ANALYSIS, client)
    tag_name = (element_data or {}).get("tagName")
    try:
        suggestion = await client.complete(
            None, SUGGESTION_PROMPT.format(tag_name=tag_name or "unknown"), image_url=image_url, model="vision"
        )
        component_type = await client.complete(None, COMPONENT_TYPE_PROMPT, image_url=image_url, model="vision")
    except Exception as exc:
        _log_failure("Element analysis", client, exc)
        suggestion, component_type = fallback_element_suggestion(tag_name)
        return {"suggestedPrompt": suggestion, "componentType": component_type, "fallback": True}

    return {"suggestedPrompt": suggestion.strip(), "componentType": component_type.strip(), "fallback": False}


def build_code_generation_prompt(
    element_data: dict,
    analysis: dict | None,
    inspirations: list[dict],
    framework: str,
    style_preferences: list[str],
) -> str:
    analysis = analysis or {}
    component_type = analysis.get("component_type") or "component"
    issues = "\n".join(f"- {issue}" for issue in analysis.get("design_issues") or [])
    recommendations = "\n".join(f"- {rec}" for rec in analysis.get("recommendations") or [])
    text = (element_data.get("textContent") or "")[:200]

    lines = [
        f"Generate an improved {framework} component based on this analysis:",
        "",
        "ORIGINAL ELEMENT:",
        f"- Tag: {element_data.get('tagName')}",
        f"- Content: {text}",
        f"- Component Type: {component_type}",
        "",
        "DESIGN ISSUES IDENTIFIED:",
        issues,
        "",
        "RECOMMENDATIONS:",
        recommendations,
        "",
        "STYLE PREFERENCES:",
        ", ".join(style_preferences),
        "",
        f"FRAMEWORK: {framework}",
    ]
    if framework == "nextjs":
        lines += ["- Use Next.js 14 with App Router", "- Include proper TypeScript types"]
    lines += [
        "- Use Tailwind CSS classes",
        "- Include Framer Motion for subtle animations",
        "- Ensure accessibility (ARIA labels, semantic HTML)",
        "- Make it responsive (mobile-first)",
    ]
    if inspirations:
        lines += ["", "DESIGN INSPIRATIONS TO CONSIDER:"]
        lines += [f"- {insp['title']}: {', '.join(insp.get('tags') or [])}" for insp in inspirations]
    lines += [
        "",
        "Please provide:",
        "1. Complete component code",
        "2. Brief description of improvements made",
        "3. List of specific enhancements",
        "",
        "Format your response as:",
        "## Description",
        "[Brief description]",
        "",
        "## Improvements",
        "- [List of improvements]",
        "",
        "## Code",
        "```typescript",
        "[Component code]",
        "```",
    ]
    return "\n".join(lines)


async def generate_element_code(
    element_data: dict,
    analysis: dict | None,
    inspirations: list[dict],
    framework: str = "nextjs",
    style_preferences: list[str] | None = None,
    client: ChatClient | None = None,
    parser: CodeResponseParser | None = None,
) -> dict:
    """Improved code for a stored element. Returns ``code``, ``description`` and ``improvements``."""
    client = _client_for(AITask.CODE_GENERATION, client)
    parser = parser or MarkdownSectionParser()
    prompt = build_code_generation_prompt(element_data, analysis, inspirations, framework, style_preferences or [])
    try:
        reply = await client.complete(ELEMENT_CODE_SYSTEM_PROMPT, prompt, max_tokens=2000, temperature=0.7)
    except Exception as exc:
        _log_failure("Element code generation", client, exc)
        return mock_element_code(element_data, framework)

    parsed = parser.parse(reply)
    return {"code": parsed.code, "description": parsed.description, "improvements": parsed.improvements}
