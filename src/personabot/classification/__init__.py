"""
Keyword-waterfall category classification.
"""

from .classifier import (
    CategoryClassifier,
    Rule,
    Waterfall,
    build_classifier,
    contains_any,
    has_word,
    matches,
    rule,
    waterfall,
    word_rule,
)

__all__ = [
    "CategoryClassifier",
    "Rule",
    "Waterfall",
    "build_classifier",
    "contains_any",
    "has_word",
    "matches",
    "rule",
    "waterfall",
    "word_rule",
]
