"""
FILE: taskboard/__init__.py
PURPOSE: Three-column task board with optimistic drag-and-drop status changes
"""

__version__ = "0.1.0"
