"""
SessionLib - Coloring session management

This module provides the coloring session object together with image
loading, PNG export and session configuration for the Brush Color project.
"""

from BC_Libs.SessionLib.session_config import ColoringConfig, load_config, save_config
from BC_Libs.SessionLib.image_loader import (
    LoadedImage,
    compute_logical_size,
    image_file_filter,
    is_supported_format,
    load_image,
    prepare_image,
)
from BC_Libs.SessionLib.image_export import default_export_name, export_png_bytes, save_buffer
from BC_Libs.SessionLib.coloring_session import ColoringSession

__all__ = [
    "ColoringConfig",
    "load_config",
    "save_config",
    "LoadedImage",
    "compute_logical_size",
    "image_file_filter",
    "is_supported_format",
    "load_image",
    "prepare_image",
    "default_export_name",
    "export_png_bytes",
    "save_buffer",
    "ColoringSession",
]
