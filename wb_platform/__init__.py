# wb_platform/__init__.py
from __future__ import annotations

CURRENT_VERSION = "1.0.0"

__all__ = ["CURRENT_VERSION"]
