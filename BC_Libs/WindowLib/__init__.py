"""
WindowLib - Desktop user interface

This module provides the PyQt5 coloring window for the Brush Color project.
"""
