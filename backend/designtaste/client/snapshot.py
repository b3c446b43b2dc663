"""
Builds the stored element snapshot from raw DOM facts.

The raw dict is what ``browser.EXTRACT_ELEMENT_JS`` returns: every computed
style of the element, its parent and children, markup and bounding box. The
snapshot keeps a fixed subset and truncates the long text fields.
"""
import re

TEXT_LIMIT = 500
CHILD_LIMIT = 10
CHILD_TEXT_LIMIT = 100
CHILD_HTML_LIMIT = 500
INNER_HTML_LIMIT = 2000

STYLE_PROPERTIES = (
    # layout
    "display", "position", "top", "right", "bottom", "left", "z-index",
    "width", "height", "min-width", "min-height", "max-width", "max-height",
    "box-sizing",
    # spacing
    "padding", "padding-top", "padding-right", "padding-bottom", "padding-left",
    "margin", "margin-top", "margin-right", "margin-bottom", "margin-left",
    # typography
    "font-family", "font-size", "font-weight", "font-style", "line-height",
    "color", "text-align", "text-decoration", "text-transform",
    "letter-spacing", "word-spacing",
    # background
    "background", "background-color", "background-image", "background-size",
    "background-position", "background-repeat",
    # borders
    "border", "border-width", "border-style", "border-color", "border-radius",
    "border-top", "border-right", "border-bottom", "border-left",
    # effects
    "box-shadow", "text-shadow", "opacity", "transform",
    # flexbox
    "flex", "flex-direction", "flex-wrap", "justify-content", "align-items",
    "align-content", "gap",
    # grid
    "grid", "grid-template-columns", "grid-template-rows", "grid-gap",
    # other
    "overflow", "cursor", "transition", "animation",
)

_SKIPPED_VALUES = ("", "normal", "none")

TAILWIND_CLASS_RE = re.compile(
    r"^(bg-|text-|p-|m-|w-|h-|flex|grid|border|rounded|shadow|font-|leading-|tracking-|space-|gap-"
    r"|justify-|items-|content-|self-|order-|col-|row-|transform|transition|duration-|ease-|scale-"
    r"|rotate-|translate-|opacity-|z-|overflow-|cursor-|select-|pointer-|sr-|focus:|hover:|active:"
    r"|disabled:|md:|lg:|xl:|2xl:|sm:)"
)

PASSTHROUGH_FIELDS = ("userPrompt", "requestType", "elementScreenshot")


def relevant_styles(computed: dict) -> dict:
    styles = {}
    for prop in STYLE_PROPERTIES:
        value = computed.get(prop)
        if value is not None and value not in _SKIPPED_VALUES:
            styles[prop] = value
    return styles


def tailwind_classes(class_list: list[str]) -> list[str]:
    return [cls for cls in class_list if TAILWIND_CLASS_RE.match(cls)]


def _parent_context(parent: dict | None) -> dict | None:
    if not parent:
        return None
    return {
        "tagName": parent.get("tagName"),
        "classList": list(parent.get("classList") or []),
        "display": parent.get("display"),
        "flexDirection": parent.get("flexDirection"),
        "justifyContent": parent.get("justifyContent"),
        "alignItems": parent.get("alignItems"),
    }


def _child_summary(child: dict) -> dict:
    return {
        "tagName": child.get("tagName"),
        "classList": list(child.get("classList") or []),
        "textContent": (child.get("textContent") or "")[:CHILD_TEXT_LIMIT],
        "innerHTML": (child.get("innerHTML") or "")[:CHILD_HTML_LIMIT],
    }


def build_element_snapshot(raw: dict) -> dict:
    class_list = list(raw.get("classList") or [])
    snapshot = {
        "html": raw.get("outerHTML") or "",
        "css": raw.get("style") or "",
        "boundingBox": raw.get("boundingBox") or {},
        "tagName": raw.get("tagName") or "",
        "textContent": (raw.get("textContent") or "")[:TEXT_LIMIT],
        "computedStyles": relevant_styles(raw.get("computedStyles") or {}),
        "classList": class_list,
        "tailwindClasses": tailwind_classes(class_list),
        "parentContext": _parent_context(raw.get("parent")),
        "children": [_child_summary(c) for c in (raw.get("children") or [])[:CHILD_LIMIT]],
        "innerHTML": (raw.get("innerHTML") or "")[:INNER_HTML_LIMIT],
        "attributes": dict(raw.get("attributes") or {}),
    }
    for name in PASSTHROUGH_FIELDS:
        if raw.get(name) is not None:
            snapshot[name] = raw[name]
    return snapshot
