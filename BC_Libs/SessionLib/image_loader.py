"""
Image loading for Brush Color.

Turns an image file (or an already-open PIL Image) into a PixelBuffer ready
for coloring: the image is flattened onto a white background, scaled down so
its longest side fits the maximum size, and rasterized at the device pixel
ratio.

Classes:
    LoadedImage: A prepared buffer plus its logical dimensions

Functions:
    compute_logical_size: Fit image dimensions inside the maximum size
    prepare_image: Build a LoadedImage from a PIL Image
    load_image: Open an image file and build a LoadedImage
    is_supported_format: Check an image file extension
    get_supported_image_formats: List supported image file extensions
    image_file_filter: Build a file dialog filter for supported images
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple

from PIL import Image

from BC_Libs.constants import (
    BACKGROUND_COLOR,
    DEFAULT_DEVICE_PIXEL_RATIO,
    MAX_IMAGE_SIZE,
    SUPPORTED_STANDARD_IMAGES,
)
from BC_Libs.FillLib.coordinate_mapper import js_round
from BC_Libs.FillLib.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


def get_supported_image_formats() -> List[str]:
    return sorted(SUPPORTED_STANDARD_IMAGES)


def image_file_filter() -> str:
    """File dialog filter matching every supported image extension."""
    patterns = " ".join(f"*{extension}" for extension in get_supported_image_formats())
    return f"Images ({patterns})"


def is_supported_format(file_path: Path) -> bool:
    return Path(file_path).suffix.lower() in SUPPORTED_STANDARD_IMAGES


@dataclass
class LoadedImage:
    """A decoded image prepared for coloring.

    Attributes:
        buffer: Pixel buffer at buffer resolution (logical size * device_pixel_ratio)
        image_width: Logical image width
        image_height: Logical image height
        device_pixel_ratio: Buffer pixels per logical pixel
        source_path: File the image came from, if any
    """
    buffer: PixelBuffer
    image_width: int
    image_height: int
    device_pixel_ratio: float = DEFAULT_DEVICE_PIXEL_RATIO
    source_path: Optional[Path] = None


def compute_logical_size(width: int, height: int, max_size: int = MAX_IMAGE_SIZE) -> Tuple[int, int]:
    """
    Scale (width, height) down so the longest side is at most ``max_size``.

    Images that already fit are returned unchanged; images are never scaled up.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image size must be > 0, got {width}x{height}")
    if max_size <= 0:
        raise ValueError(f"max_size must be > 0, got {max_size}")

    longest = max(width, height)
    if longest <= max_size:
        return width, height

    scale = max_size / longest
    return max(1, js_round(width * scale)), max(1, js_round(height * scale))


def prepare_image(
    image: Any,
    device_pixel_ratio: float = DEFAULT_DEVICE_PIXEL_RATIO,
    max_size: int = MAX_IMAGE_SIZE,
    source_path: Optional[Path] = None,
) -> LoadedImage:
    """
    Rasterize a PIL Image into a coloring buffer.

    Args:
        image: PIL Image in any mode
        device_pixel_ratio: Buffer pixels per logical pixel (> 0)
        max_size: Longest logical side after scaling
        source_path: Optional origin recorded on the result

    Returns:
        LoadedImage whose buffer is opaque wherever the source was transparent

    Raises:
        TypeError: If image is not a PIL Image
        ValueError: If device_pixel_ratio or max_size is invalid
    """
    if not hasattr(image, "size") or not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")
    if device_pixel_ratio <= 0:
        raise ValueError(f"device_pixel_ratio must be > 0, got {device_pixel_ratio}")

    logical_width, logical_height = compute_logical_size(image.width, image.height, max_size)
    buffer_width = max(1, int(logical_width * device_pixel_ratio))
    buffer_height = max(1, int(logical_height * device_pixel_ratio))

    rgba = image.convert("RGBA")
    if rgba.size != (buffer_width, buffer_height):
        rgba = rgba.resize((buffer_width, buffer_height), Image.Resampling.LANCZOS)

    canvas = Image.new("RGBA", (buffer_width, buffer_height), BACKGROUND_COLOR)
    canvas.alpha_composite(rgba)

    return LoadedImage(
        buffer=PixelBuffer.from_image(canvas),
        image_width=logical_width,
        image_height=logical_height,
        device_pixel_ratio=float(device_pixel_ratio),
        source_path=source_path,
    )


def load_image(
    file_path: Path,
    device_pixel_ratio: float = DEFAULT_DEVICE_PIXEL_RATIO,
    max_size: int = MAX_IMAGE_SIZE,
) -> LoadedImage:
    """
    Open an image file and prepare it for coloring.

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file is not a supported, decodable image
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Image file not found: {file_path}")
    if not file_path.is_file():
        raise OSError(f"Path is not a file: {file_path}")
    if not is_supported_format(file_path):
        raise OSError(f"Unsupported image format: {file_path.suffix or file_path.name}")

    try:
        with Image.open(file_path) as image:
            image.load()
            loaded = prepare_image(image, device_pixel_ratio, max_size, source_path=file_path)
    except (OSError, SyntaxError) as exc:
        raise OSError(f"Could not load image {file_path}: {exc}") from exc

    logger.info(
        f"Loaded {file_path.name} at {loaded.image_width}x{loaded.image_height} "
        f"(buffer {loaded.buffer.width}x{loaded.buffer.height})"
    )
    return loaded
