"""
Presentation layer: local entry points (CLI).
"""
