# Clitree CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for clitree."""
import logging

logger: logging.Logger = logging.getLogger("clitree")
