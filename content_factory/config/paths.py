"""
Paths configuration

Centralized directory paths for the application.
"""

import os
from pathlib import Path

# Base directories
APP_DIR = Path(__file__).parent.parent
BASE_DIR = APP_DIR.parent
DATA_DIR = Path(os.getenv("CONTENT_FACTORY_DATA_DIR", str(BASE_DIR / "data")))

__all__ = ["APP_DIR", "BASE_DIR", "DATA_DIR"]
