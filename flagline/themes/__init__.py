"""
Flagline Command Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .colors import OneColors, get_flagline_theme

__all__ = [
    "OneColors",
    "get_flagline_theme",
]
