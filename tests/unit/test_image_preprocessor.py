import io

import pytest
from PIL import Image

from kycdoc.imaging.exceptions import ImageProcessingError
from kycdoc.imaging.preprocessor import ImagePreprocessor


def _open(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


class TestImagePreprocessor:
    def test_jpeg_becomes_greyscale_jpeg(self, jpeg_bytes: bytes) -> None:
        out = _open(ImagePreprocessor().process(jpeg_bytes))
        assert out.format == "JPEG"
        assert out.mode == "L"

    def test_png_is_accepted(self, png_bytes: bytes) -> None:
        out = _open(ImagePreprocessor().process(png_bytes))
        assert out.format == "JPEG"
        assert out.mode == "L"

    def test_small_image_is_not_enlarged(self, jpeg_bytes: bytes) -> None:
        out = _open(ImagePreprocessor().process(jpeg_bytes))
        assert out.size == (400, 250)

    def test_large_image_fits_bound_keeping_aspect(self, large_jpeg_bytes: bytes) -> None:
        out = _open(ImagePreprocessor().process(large_jpeg_bytes))
        assert out.size == (2000, 1000)

    def test_custom_bound(self, jpeg_bytes: bytes) -> None:
        out = _open(ImagePreprocessor(max_dimension=200).process(jpeg_bytes))
        assert max(out.size) == 200

    def test_garbage_bytes_raise(self) -> None:
        with pytest.raises(ImageProcessingError, match="Failed to process image"):
            ImagePreprocessor().process(b"not an image")

    def test_empty_bytes_raise(self) -> None:
        with pytest.raises(ImageProcessingError):
            ImagePreprocessor().process(b"")

    def test_unsupported_format_raises(self, gif_bytes: bytes) -> None:
        with pytest.raises(ImageProcessingError, match="Unsupported image format: GIF"):
            ImagePreprocessor().process(gif_bytes)
