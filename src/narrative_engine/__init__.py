"""Narrative event detection and encounter synthesis for tabletop RPG sessions."""
from __future__ import annotations

__version__ = "0.1.0"
