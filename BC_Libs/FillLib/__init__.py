"""
FillLib - Region fill engine

This module provides the pixel buffer, outline/tolerance classification,
scanline flood fill and erase, bounded undo history and tap coordinate
mapping for the Brush Color project.
"""

from BC_Libs.FillLib.pixel_buffer import PixelBuffer, RgbaColor
from BC_Libs.FillLib.region_classifier import RegionClassifier, hex_to_rgba, is_outline, matches
from BC_Libs.FillLib.history_manager import HistoryManager
from BC_Libs.FillLib.fill_engine import FillEngine, FillOutcome, FillResult
from BC_Libs.FillLib.coordinate_mapper import (
    CoordinateMapper,
    DisplayRect,
    fit_to_container,
    js_round,
)

__all__ = [
    "PixelBuffer",
    "RgbaColor",
    "RegionClassifier",
    "hex_to_rgba",
    "is_outline",
    "matches",
    "HistoryManager",
    "FillEngine",
    "FillOutcome",
    "FillResult",
    "CoordinateMapper",
    "DisplayRect",
    "fit_to_container",
    "js_round",
]
