"""Sprite-sheet animation, LDTk tile maps, grid pathfinding and an asset library for 2D games."""

__version__ = "0.1.0"

__all__ = ["assets", "layer", "maploader", "navigation", "spritesheet", "tilemap"]