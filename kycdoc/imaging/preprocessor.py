"""OCR-oriented normalization of uploaded document photos."""

import io

from PIL import Image, ImageFilter, ImageOps

from kycdoc.imaging.exceptions import ImageProcessingError
from kycdoc.logging.logger import Log

MAX_IMAGE_DIMENSION = 2000
JPEG_QUALITY = 90
SUPPORTED_FORMATS = frozenset({"JPEG", "PNG"})


class ImagePreprocessor:
    """Turns a JPEG/PNG upload into a greyscale, sharpened JPEG for OCR.

    The image is fitted inside ``max_dimension`` x ``max_dimension``;
    smaller images keep their size.
    """

    def __init__(
        self,
        max_dimension: int = MAX_IMAGE_DIMENSION,
        jpeg_quality: int = JPEG_QUALITY,
    ) -> None:
        self._max_dimension = max_dimension
        self._jpeg_quality = jpeg_quality

    def process(self, image_bytes: bytes) -> bytes:
        """Normalize image bytes.

        Raises:
            ImageProcessingError: if the bytes are not a decodable JPEG/PNG.
        """
        try:
            with Image.open(io.BytesIO(image_bytes)) as source:
                if source.format not in SUPPORTED_FORMATS:
                    raise ImageProcessingError(
                        f"Unsupported image format: {source.format}. "
                        f"Only {', '.join(sorted(SUPPORTED_FORMATS))} are allowed."
                    )
                image = ImageOps.exif_transpose(source)
                image = ImageOps.grayscale(image)
                image = ImageOps.autocontrast(image)
                image = image.filter(ImageFilter.SHARPEN)
                original_size = image.size
                image.thumbnail(
                    (self._max_dimension, self._max_dimension),
                    Image.Resampling.LANCZOS,
                )
                output = io.BytesIO()
                image.save(output, format="JPEG", quality=self._jpeg_quality)
        except ImageProcessingError:
            raise
        except Exception as exc:
            raise ImageProcessingError(f"Failed to process image: {exc}") from exc

        processed = output.getvalue()
        Log.debug(
            f"Preprocessed image {original_size[0]}x{original_size[1]} -> "
            f"{image.size[0]}x{image.size[1]}, {len(image_bytes)} -> {len(processed)} bytes"
        )
        return processed
