# Flagline Command Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Flagline."""
import logging

logger: logging.Logger = logging.getLogger("flagline")
