"""Visualization utilities.

This package contains plotting helpers intended for quick exploratory looks
at tabular data:

- Column grids (one cell per column, optionally against an outcome)
- Gradient color mapping for per-row colors
- Scatterplot matrices with an interactive threshold coloring

Cells are drawn through an explicit layout context so the shared layout
state is always put back after a call.
"""
