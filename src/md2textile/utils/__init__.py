#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers shared by the renderer and the command-line tools."""
