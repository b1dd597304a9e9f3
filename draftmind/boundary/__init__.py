"""
Boundary layer: persistence and external service adapters.
"""
