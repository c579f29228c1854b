"""
FILE: taskboard/core/__init__.py
PURPOSE: Board engine: status mapping, projection, collisions, drag state
machine, optimistic mutations, and the task repository
"""
