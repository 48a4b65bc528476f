# src/tetris_core/utils/paths.py
from __future__ import annotations

from pathlib import Path


def package_root() -> Path:
    """
    Return the installed tetris_core package directory.
    """
    return Path(__file__).resolve().parent.parent


def assets_dir() -> Path:
    """
    Return tetris_core/assets (must exist).
    """
    p = package_root() / "assets"
    if not p.is_dir():
        raise FileNotFoundError(f"Assets directory not found: {p}")
    return p


def pieces_dir() -> Path:
    """
    Return tetris_core/assets/pieces (must exist).
    """
    p = assets_dir() / "pieces"
    if not p.is_dir():
        raise FileNotFoundError(f"Pieces directory not found: {p}")
    return p


__all__ = ["package_root", "assets_dir", "pieces_dir"]
