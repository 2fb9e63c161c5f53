"""
Input Classifier Module

Decides whether a submission is program source or casual conversation.

Design Decisions:
- Lexical heuristic over a fixed set of markers, not a parser
- False positives and negatives are accepted; no language grammar is used
- Classifiers share a small protocol so a structural classifier can be
  swapped in without touching the orchestrator
"""

import re
from typing import Pattern, Protocol, Sequence, Tuple

from app.models import InputKind


class InputClassifier(Protocol):
    """Anything that can label a submission as code or casual text."""

    def classify(self, text: str) -> InputKind:
        ...


# Markers that commonly appear in program source
CODE_MARKERS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("function_declaration", re.compile(r"\bfunction\b\s*\*?\s*[\w$]*\s*\(")),
    ("class_declaration", re.compile(r"\bclass\s+[A-Za-z_$][\w$]*(?:\s+extends\b|\s*[{:(])")),
    ("variable_declaration", re.compile(r"\b(?:const|let|var)\s+[A-Za-z_$][\w$]*\s*=")),
    ("module_import_export", re.compile(r"^\s*(?:import|export)\b", re.MULTILINE)),
    ("arrow_function", re.compile(r"=>")),
)


class PatternClassifier:
    """
    Classifier that looks for lexical markers of program source.

    Any marker match means code; otherwise the input is casual text.

    Usage:
        classifier = PatternClassifier()
        kind = classifier.classify("const x = 1;")
    """

    def __init__(self, markers: Sequence[Tuple[str, Pattern[str]]] = CODE_MARKERS):
        self.markers = tuple(markers)

    def classify(self, text: str) -> InputKind:
        if any(pattern.search(text) for _, pattern in self.markers):
            return InputKind.CODE
        return InputKind.CASUAL_TEXT
