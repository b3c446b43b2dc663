import io

import pytest
from PIL import Image

from designtaste.client.screenshot import (
    crop_to_element,
    decode_data_uri,
    placeholder_screenshot,
    to_data_uri,
)


def _png(width, height, color="white"):
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def _size(png):
    return Image.open(io.BytesIO(png)).size


class TestCropToElement:
    def test_padded_canvas(self):
        png = crop_to_element(_png(800, 600), {"x": 100, "y": 100, "width": 200, "height": 150})
        assert _size(png) == (216, 166)

    def test_minimum_canvas(self):
        png = crop_to_element(_png(800, 600), {"x": 10, "y": 10, "width": 20, "height": 20})
        assert _size(png) == (100, 100)

    def test_left_top_keys(self):
        png = crop_to_element(_png(800, 600), {"left": 50, "top": 60, "width": 120, "height": 90})
        assert _size(png) == (136, 106)

    def test_device_pixel_ratio_samples_scaled_region(self):
        # left half red, right half blue at 2x; the element sits in the blue half in CSS pixels
        img = Image.new("RGB", (1600, 1200), "red")
        img.paste(Image.new("RGB", (800, 1200), "blue"), (800, 0))
        buf = io.BytesIO()
        img.save(buf, format="PNG")

        png = crop_to_element(buf.getvalue(), {"x": 500, "y": 100, "width": 200, "height": 200}, 2.0)
        cropped = Image.open(io.BytesIO(png)).convert("RGB")
        assert cropped.size == (216, 216)
        assert cropped.getpixel((108, 108)) == (0, 0, 255)

    def test_clamped_at_viewport_edge(self):
        png = crop_to_element(_png(300, 300), {"x": 250, "y": 250, "width": 200, "height": 200})
        assert _size(png) == (216, 216)

    def test_outside_viewport(self):
        with pytest.raises(ValueError):
            crop_to_element(_png(300, 300), {"x": 500, "y": 500, "width": 50, "height": 50})


def test_placeholder_minimum_size():
    assert _size(placeholder_screenshot("button", 40, 20)) == (200, 100)
    assert _size(placeholder_screenshot("", 640, 300)) == (640, 300)


def test_placeholder_background():
    img = Image.open(io.BytesIO(placeholder_screenshot("div", 300, 150))).convert("RGB")
    assert img.getpixel((2, 2)) == (0xF8, 0xFA, 0xFC)


def test_data_uri_round_trip():
    png = _png(4, 4)
    uri = to_data_uri(png)
    assert uri.startswith("data:image/png;base64,")
    assert decode_data_uri(uri) == ("image/png", png)


@pytest.mark.parametrize("uri", ["https://example.com/a.png", "data:image/png;base64,@@@"])
def test_decode_data_uri_rejects(uri):
    with pytest.raises(ValueError):
        decode_data_uri(uri)
