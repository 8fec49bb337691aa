"""
Infrastructure layer: memory stores and logging setup.
"""
