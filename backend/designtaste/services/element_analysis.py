"""
Rule-based analysis of a captured element snapshot.

Every function here is pure: the same snapshot always yields the same
output. The component-type rules are an ordered priority list; the first
rule that matches wins.
"""
import re

COMPONENT_TYPES = ("hero", "card", "form", "navigation", "button", "footer", "sidebar", "layout")

CONFIDENCE_SCORE = 0.8

NO_ISSUES = "No major design issues detected"

_PROMPT_STOPWORDS = {"the", "and", "this", "that", "with", "for"}
_DESIGN_TERMS = ["modern", "clean", "minimal", "ui", "design", "interface"]


def _kebab(name: str) -> str:
    return re.sub(r"([A-Z])", lambda m: "-" + m.group(1).lower(), name)


def style_value(styles: dict, name: str) -> str | None:
    """Look up a computed style by camelCase name, falling back to kebab-case."""
    value = styles.get(name)
    if value is None:
        value = styles.get(_kebab(name))
    return value or None


def _px(value: str | None) -> float | None:
    if not value:
        return None
    match = re.match(r"\s*(-?\d+(?:\.\d+)?)", value)
    return float(match.group(1)) if match else None


def _class_text(element_data: dict) -> str:
    classes = element_data.get("classList") or []
    parts = [" ".join(str(c) for c in classes), element_data.get("html") or ""]
    return " ".join(parts).lower()


def detect_component_type(element_data: dict) -> str:
    tag = (element_data.get("tagName") or "").lower()
    text = (element_data.get("textContent") or "").lower()
    classes = _class_text(element_data)

    if tag == "nav" or "menu" in text or "nav" in classes:
        return "navigation"
    if tag == "header" or "hero" in text or "hero" in classes:
        return "hero"
    if tag == "footer" or "footer" in classes:
        return "footer"
    if tag == "form" or "submit" in text or "form" in classes:
        return "form"
    if tag == "button" or "btn" in classes or "button" in classes:
        return "button"
    if tag in ("article", "section") or "card" in classes:
        return "card"
    if tag == "aside" or "sidebar" in classes:
        return "sidebar"
    return "layout"


def generate_design_issues(element_data: dict, component_type: str) -> list[str]:
    styles = element_data.get("computedStyles") or {}
    issues = []

    color = style_value(styles, "color")
    background = style_value(styles, "backgroundColor")
    if color and background and (color == background or color == "inherit"):
        issues.append("Poor color contrast - text may be hard to read")

    padding = style_value(styles, "padding")
    if not padding or padding == "0px":
        issues.append("Insufficient padding - element may feel cramped")

    margin = style_value(styles, "margin")
    if not margin or margin == "0px":
        issues.append("No margins - element may be too close to others")

    if component_type == "button" and not style_value(styles, "borderRadius"):
        issues.append("Sharp corners - modern buttons typically have rounded edges")

    weight = style_value(styles, "fontWeight")
    if not weight or weight == "normal":
        issues.append("Weak typography hierarchy - consider bolder text for emphasis")

    return issues or [NO_ISSUES]


def extract_style_characteristics(element_data: dict) -> list[str]:
    styles = element_data.get("computedStyles") or {}
    classes = _class_text(element_data)
    characteristics = []

    radius = _px(style_value(styles, "borderRadius"))
    if radius is not None and radius > 8:
        characteristics.append("rounded")

    shadow = style_value(styles, "boxShadow")
    if shadow and shadow != "none":
        characteristics.append("elevated")

    background = style_value(styles, "background") or ""
    if "gradient" in classes or "gradient" in background:
        characteristics.append("gradient")

    background_color = style_value(styles, "backgroundColor")
    if not background_color or background_color == "transparent":
        characteristics.append("minimal")

    font_size = _px(style_value(styles, "fontSize"))
    if font_size is not None and font_size > 18:
        characteristics.append("large-text")

    return characteristics or ["standard"]


_RECOMMENDATIONS = {
    "button": [
        "Consider adding hover effects with transition animations",
        "Use consistent padding (e.g., px-6 py-3) for better proportions",
        "Add focus states for accessibility (focus:ring-2)",
    ],
    "card": [
        "Add subtle shadows for depth (shadow-md)",
        "Use consistent border radius (rounded-lg)",
        "Consider proper spacing between content elements",
    ],
    "navigation": [
        "Ensure proper spacing between navigation items",
        "Add hover states for interactive elements",
        "Consider sticky positioning for better UX",
    ],
}

_DEFAULT_RECOMMENDATIONS = [
    "Improve visual hierarchy with proper typography scale",
    "Add consistent spacing using a design system",
    "Consider accessibility improvements (contrast, focus states)",
]


def generate_recommendations(element_data: dict, component_type: str) -> list[str]:
    return list(_RECOMMENDATIONS.get(component_type, _DEFAULT_RECOMMENDATIONS))


def generate_search_keywords(
    component_type: str, user_prompt: str | None, characteristics: list[str]
) -> list[str]:
    keywords = [component_type, *characteristics]
    if user_prompt:
        words = re.split(r"[^a-z]+", user_prompt.lower())
        keywords.extend(w for w in words if len(w) > 2 and w not in _PROMPT_STOPWORDS)
    keywords.extend(_DESIGN_TERMS)
    # dict preserves first-seen order
    return list(dict.fromkeys(keywords))


def analyze_element(element_data: dict) -> dict:
    component_type = detect_component_type(element_data)
    return {
        "component_type": component_type,
        "design_issues": generate_design_issues(element_data, component_type),
        "style_characteristics": extract_style_characteristics(element_data),
        "recommendations": generate_recommendations(element_data, component_type),
        "confidence_score": CONFIDENCE_SCORE,
    }
