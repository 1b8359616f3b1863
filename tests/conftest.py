import io
from datetime import date

import pytest
from PIL import Image, ImageDraw

FIXED_TODAY = date(2024, 6, 1)


def _image_bytes(size: tuple[int, int], fmt: str, mode: str = "RGB") -> bytes:
    image = Image.new(mode, size, "white")
    draw = ImageDraw.Draw(image)
    draw.rectangle((10, 10, size[0] // 2, size[1] // 4), outline="black")
    draw.text((20, 20), "Name: Jane Doe", fill="black")
    buf = io.BytesIO()
    image.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture()
def fixed_today() -> date:
    return FIXED_TODAY


@pytest.fixture()
def jpeg_bytes() -> bytes:
    """A small RGB JPEG with some drawn text."""
    return _image_bytes((400, 250), "JPEG")


@pytest.fixture()
def png_bytes() -> bytes:
    return _image_bytes((300, 200), "PNG", mode="RGBA")


@pytest.fixture()
def large_jpeg_bytes() -> bytes:
    """A JPEG wider than the default 2000px bound."""
    return _image_bytes((3000, 1500), "JPEG")


@pytest.fixture()
def gif_bytes() -> bytes:
    return _image_bytes((50, 50), "GIF", mode="P")
