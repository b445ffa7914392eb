"""Shared type aliases for readability and contract enforcement."""
from __future__ import annotations

from typing import NewType

AssetId = NewType("AssetId", str)
