"""
Headless element capture with Playwright.

Loads a page, finds the first element matching a CSS selector, extracts its
raw DOM facts and crops a viewport screenshot down to it.
"""
import logging

from playwright.async_api import async_playwright

from designtaste.client.screenshot import crop_to_element, placeholder_screenshot, to_data_uri
from designtaste.client.snapshot import build_element_snapshot

logger = logging.getLogger(__name__)

# Returns every computed style; build_element_snapshot keeps the relevant ones.
EXTRACT_ELEMENT_JS = """(element) => {
    const toStyleMap = (styles) => {
        const map = {};
        for (let i = 0; i < styles.length; i++) {
            const name = styles[i];
            map[name] = styles.getPropertyValue(name);
        }
        return map;
    };
    const rect = element.getBoundingClientRect();
    const parent = element.parentElement;
    const parentStyles = parent ? window.getComputedStyle(parent) : null;
    return {
        outerHTML: element.outerHTML,
        style: element.getAttribute('style') || '',
        boundingBox: {
            x: rect.x, y: rect.y, width: rect.width, height: rect.height,
            top: rect.top, right: rect.right, bottom: rect.bottom, left: rect.left,
        },
        tagName: element.tagName,
        textContent: element.textContent || '',
        computedStyles: toStyleMap(window.getComputedStyle(element)),
        classList: Array.from(element.classList),
        parent: parent ? {
            tagName: parent.tagName,
            classList: Array.from(parent.classList),
            display: parentStyles.display,
            flexDirection: parentStyles.flexDirection,
            justifyContent: parentStyles.justifyContent,
            alignItems: parentStyles.alignItems,
        } : null,
        children: Array.from(element.children).map((child) => ({
            tagName: child.tagName,
            classList: Array.from(child.classList),
            textContent: child.textContent || '',
            innerHTML: child.innerHTML,
        })),
        innerHTML: element.innerHTML,
        attributes: Object.fromEntries(Array.from(element.attributes).map((a) => [a.name, a.value])),
        devicePixelRatio: window.devicePixelRatio || 1,
    };
}"""


async def capture_element(
    url: str,
    selector: str,
    viewport: dict | None = None,
    timeout_ms: int = 15000,
) -> tuple[dict, str]:
    """Returns ``(snapshot, screenshot data URI)``; the screenshot is empty if the capture failed."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        try:
            context = await browser.new_context(viewport=viewport or {"width": 1280, "height": 800})
            page = await context.new_page()
            try:
                await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
            except Exception:
                logger.warning("networkidle timed out for %s, retrying with domcontentloaded", url)
                await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)

            element = await page.query_selector(selector)
            if element is None:
                raise LookupError(f"No element matches {selector!r} on {url}")
            await element.scroll_into_view_if_needed()

            raw = await element.evaluate(EXTRACT_ELEMENT_JS)
            snapshot = build_element_snapshot(raw)

            try:
                viewport_png = await page.screenshot()
            except Exception:
                logger.exception("Viewport capture failed for %s", url)
                return snapshot, ""
        finally:
            await browser.close()

    box = raw["boundingBox"]
    try:
        png = crop_to_element(viewport_png, box, raw.get("devicePixelRatio", 1))
    except Exception:
        logger.warning("Could not crop capture to %s, using placeholder", selector, exc_info=True)
        png = placeholder_screenshot(raw.get("tagName") or "", box.get("width", 0), box.get("height", 0))
    return snapshot, to_data_uri(png)
