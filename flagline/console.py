# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for Flagline."""
from rich.console import Console

from flagline.themes import get_flagline_theme

console = Console(color_system="truecolor", theme=get_flagline_theme())
