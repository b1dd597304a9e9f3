"""
Core domain logic.

Pure functions and exceptions shared by the boundary and application layers.
"""
