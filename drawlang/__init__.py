"""
drawlang - a small command language that turns typed commands into drawings.

    point(3, 5)
    line(0, 0)(3, 4), point(1 + 2, 4 * (2 - 1))
"""

from drawlang.core import CommandProcessor, DrawLangError, build_default_registries
from drawlang.figure import FigureHistory

__version__ = "0.1.0"
__all__ = [
    "CommandProcessor",
    "DrawLangError",
    "FigureHistory",
    "build_default_registries",
]
