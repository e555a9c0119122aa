"""
Fragment classification: raw text → formula token.
"""

from tagformula.classifier.fragment_classifier import (
    FragmentClassifier,
    classify_fragment,
)

__all__ = [
    "FragmentClassifier",
    "classify_fragment",
]
