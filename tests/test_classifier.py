"""
Tests for Input Classifier

Tests the lexical code vs. casual text heuristic.
"""

import pytest

from app.models import InputKind
from app.services.classifier import PatternClassifier


class TestPatternClassifier:
    """Test suite for PatternClassifier."""

    def setup_method(self):
        """Set up test fixtures."""
        self.classifier = PatternClassifier()

    @pytest.mark.parametrize("text", [
        "function foo() {}",
        "class Greeter {\n  greet() {}\n}",
        "const total = 1;",
        "let count = 0",
        "var name = 'x';",
        "import React from 'react';",
        "export default App;",
        "items.map((item) => item.id)",
        "async function load() { await fetch(url); }",
        "class Dog extends Animal {}",
        "class Repository:\n    pass",
    ])
    def test_code_detected(self, text):
        """Test that each marker classifies as code."""
        assert self.classifier.classify(text) == InputKind.CODE

    @pytest.mark.parametrize("text", [
        "hello, how are you?",
        "Can you help me understand recursion?",
        "Let me know what you think",
        "This is an important question",
        "which class should I take?",
        "I missed class today, can you help?",
        "",
    ])
    def test_casual_text_detected(self, text):
        """Test that plain prose is casual text."""
        assert self.classifier.classify(text) == InputKind.CASUAL_TEXT

    def test_custom_markers(self):
        """Test that a classifier can use its own markers."""
        import re

        classifier = PatternClassifier(markers=[("python_def", re.compile(r"^def \w+\(", re.MULTILINE))])

        assert classifier.classify("def main():\n    pass") == InputKind.CODE
        assert classifier.classify("const x = 1;") == InputKind.CASUAL_TEXT
