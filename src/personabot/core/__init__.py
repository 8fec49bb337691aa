"""
Core building blocks: error taxonomy and the declarative pipeline.
"""
