"""Crop viewport captures down to a single element."""
import base64
import binascii
import io
import re

from PIL import Image, ImageDraw

CROP_PADDING = 8
MIN_CANVAS = 100

_DATA_URI_RE = re.compile(r"^data:(?P<media_type>[\w/+.-]+);base64,(?P<data>.*)$", re.S)


def to_data_uri(image_bytes: bytes, media_type: str = "image/png") -> str:
    return f"data:{media_type};base64,{base64.b64encode(image_bytes).decode()}"


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Returns ``(media_type, raw bytes)``; raises ValueError for anything but a base64 data URI."""
    match = _DATA_URI_RE.match(uri)
    if not match:
        raise ValueError("Not a base64 data URI")
    try:
        return match["media_type"], base64.b64decode(match["data"], validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 payload: {exc}") from exc


def _to_png(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG", optimize=True)
    return buf.getvalue()


def crop_to_element(
    screenshot: bytes, box: dict, device_pixel_ratio: float = 1.0, padding: int = CROP_PADDING
) -> bytes:
    """
    Crop a viewport capture to the element's bounding box plus padding.

    ``box`` is in CSS pixels (x/y or left/top, width, height); the capture is
    in device pixels. The output canvas is the padded box in CSS pixels, at
    least 100x100.
    """
    img = Image.open(io.BytesIO(screenshot))
    img.load()

    x = box.get("x", box.get("left", 0))
    y = box.get("y", box.get("top", 0))
    width = box.get("width", 0)
    height = box.get("height", 0)
    dpr = device_pixel_ratio or 1.0

    left = max(0, round((x - padding) * dpr))
    top = max(0, round((y - padding) * dpr))
    right = min(img.width, round((x + width + padding) * dpr))
    bottom = min(img.height, round((y + height + padding) * dpr))
    if right <= left or bottom <= top:
        raise ValueError("Element is outside the captured viewport")

    canvas_size = (max(round(width + padding * 2), MIN_CANVAS), max(round(height + padding * 2), MIN_CANVAS))
    cropped = img.crop((left, top, right, bottom)).resize(canvas_size, Image.LANCZOS)
    return _to_png(cropped)


def _dashed_rect(draw: ImageDraw.ImageDraw, bounds: tuple[int, int, int, int], fill: str, dash: int = 5):
    x0, y0, x1, y1 = bounds
    for start in range(x0, x1, dash * 2):
        end = min(start + dash, x1)
        draw.line([(start, y0), (end, y0)], fill=fill, width=2)
        draw.line([(start, y1), (end, y1)], fill=fill, width=2)
    for start in range(y0, y1, dash * 2):
        end = min(start + dash, y1)
        draw.line([(x0, start), (x0, end)], fill=fill, width=2)
        draw.line([(x1, start), (x1, end)], fill=fill, width=2)


def placeholder_screenshot(tag_name: str, width: float, height: float) -> bytes:
    """Dashed outline with the tag name, for when the real capture can't be cropped."""
    size = (max(round(width), 200), max(round(height), 100))
    img = Image.new("RGB", size, "#f8fafc")
    draw = ImageDraw.Draw(img)
    _dashed_rect(draw, (10, 10, size[0] - 10, size[1] - 10), "#e2e8f0")

    label = (tag_name or "ELEMENT").upper()
    left, top, right, bottom = draw.textbbox((0, 0), label)
    draw.text(((size[0] - (right - left)) / 2, (size[1] - (bottom - top)) / 2), label, fill="#64748b")
    return _to_png(img)
