"""
Export of colored pictures for Brush Color.

Functions:
    export_png_bytes: Encode a buffer as PNG bytes
    save_buffer: Save a buffer to disk
    default_export_name: Build a file name for an exported picture
"""

import logging
from io import BytesIO
from pathlib import Path
from typing import Optional

from BC_Libs.constants import DEFAULT_EXPORT_FORMAT, EXPORT_FILE_PREFIX
from BC_Libs.FillLib.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


def export_png_bytes(buffer: PixelBuffer) -> bytes:
    """Encode the live pixels of a buffer as PNG."""
    output = BytesIO()
    buffer.to_image().save(output, format=DEFAULT_EXPORT_FORMAT)
    return output.getvalue()


def default_export_name(source_path: Optional[Path] = None) -> str:
    stem = source_path.stem if source_path is not None else "picture"
    return f"{EXPORT_FILE_PREFIX}{stem}.png"


def save_buffer(buffer: PixelBuffer, output_path: Path) -> Path:
    """
    Save the live pixels of a buffer as a PNG file.

    Args:
        buffer: Buffer to export
        output_path: Destination file; its parent directory must exist

    Returns:
        The path written

    Raises:
        OSError: If the directory does not exist or the file cannot be written
    """
    output_path = Path(output_path)
    if not output_path.parent.exists():
        raise OSError(f"Output directory does not exist: {output_path.parent}")
    if output_path.exists() and output_path.is_dir():
        raise OSError(f"Output path is a directory: {output_path}")

    buffer.to_image().save(output_path, format=DEFAULT_EXPORT_FORMAT)
    logger.info(f"Exported {buffer.width}x{buffer.height} picture to {output_path}")
    return output_path
