"""Render-tree layer — nodes wrapping host elements, and views."""
