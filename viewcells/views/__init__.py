"""View rendering module for cell templates.

This module handles template lookup and rendering for cell states, separate
from the cells themselves. Cells publish variables; views bind them into a
per-state rendering context and render Jinja2 templates.
"""
