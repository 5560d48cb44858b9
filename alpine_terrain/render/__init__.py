"""
Interactive rendering.

The Raylib viewer lives in terrain_viewer and needs the optional
``viewer`` extra (pyray).
"""
