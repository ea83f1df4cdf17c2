"""
BC_Libs - Brush Color Library Modules

This package contains core functionality for the Brush Color coloring book,
organized into specialized sub-packages:

- FillLib: Pixel buffer, region classification, flood fill, undo history
  and tap coordinate mapping
- SessionLib: Coloring session state, image loading, export and configuration
- WindowLib: PyQt5 desktop coloring window
"""

__version__ = "0.1.0"
