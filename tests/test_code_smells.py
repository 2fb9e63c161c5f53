"""
Tests for Code Smell Detector

Tests the static long function, large class and parameter count checks.
"""

from app.services.code_smells import (
    LARGE_CLASS_MESSAGE,
    LONG_FUNCTION_MESSAGE,
    TOO_MANY_PARAMETERS_MESSAGE,
    CodeSmellDetector,
)


class TestCodeSmellDetector:
    """Test suite for CodeSmellDetector."""

    def setup_method(self):
        """Set up test fixtures."""
        self.detector = CodeSmellDetector()

    def test_clean_code(self):
        """Test that small code has no smells."""
        code = "function add(a, b) {\n  return a + b;\n}\n"

        assert self.detector.detect(code) == []

    def test_long_function(self):
        """Test that a function body over 30 lines is flagged."""
        body = "\n".join(f"  step{i}();" for i in range(40))
        code = f"function process() {{\n{body}\n}}\n"

        assert self.detector.detect(code) == [LONG_FUNCTION_MESSAGE]

    def test_function_at_limit_not_flagged(self):
        """Test that a 30-line function is not flagged."""
        body = "\n".join(f"  step{i}();" for i in range(28))
        code = f"function process() {{\n{body}\n}}"

        assert LONG_FUNCTION_MESSAGE not in self.detector.detect(code)

    def test_large_class(self):
        """Test that a class spanning over 200 lines is flagged."""
        body = "\n".join(f"  field{i} = {i};" for i in range(210))
        code = f"class Inventory {{\n{body}\n}}\n"

        assert self.detector.detect(code) == [LARGE_CLASS_MESSAGE]

    def test_too_many_parameters(self):
        """Test that a function with six parameters is flagged."""
        code = "function build(a, b, c, d, e, f) {\n  return a;\n}\n"

        assert self.detector.detect(code) == [TOO_MANY_PARAMETERS_MESSAGE]

    def test_one_message_per_offender(self):
        """Test that each offending function adds its own message."""
        code = (
            "function one(a, b, c, d, e, f) { return a; }\n"
            "function two(a, b, c, d, e, f, g) { return g; }\n"
        )

        assert self.detector.detect(code) == [TOO_MANY_PARAMETERS_MESSAGE] * 2
