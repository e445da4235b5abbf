"""
Optional inference backends for vision_kit.

Kept in a separate module so ranking, geometry and overlay helpers stay
usable without installing an inference runtime.
"""

from __future__ import annotations

__all__ = []
