"""
Code Smell Detector Module

Cheap static checks run over a whole submission before it is chunked.
Findings are reported next to the model's review.

Design Decisions:
- Regex heuristics only; a match ends at the first closing brace, so
  nested blocks shorten what is measured
- One message per offending match
"""

import re
from typing import List

from app.logging_config import get_logger

logger = get_logger(__name__)


FUNCTION_BODY_PATTERN = re.compile(r"function\s+\w+\s*\(.*\)\s*\{([\s\S]*?)\}")
CLASS_BODY_PATTERN = re.compile(r"class\s+\w+\s*\{([\s\S]*?)\}")
FUNCTION_PARAMS_PATTERN = re.compile(r"function\s+\w+\s*\((.*?)\)")

MAX_FUNCTION_LINES = 30
MAX_CLASS_LINES = 200
MAX_PARAMETERS = 5

LONG_FUNCTION_MESSAGE = (
    f"Long Function Detected: A function exceeds {MAX_FUNCTION_LINES} lines. "
    "Consider breaking it into smaller functions."
)
LARGE_CLASS_MESSAGE = (
    f"Large Class Detected: A class exceeds {MAX_CLASS_LINES} lines. "
    "Consider splitting it into multiple classes."
)
TOO_MANY_PARAMETERS_MESSAGE = (
    f"Too Many Parameters: A function has more than {MAX_PARAMETERS} parameters. "
    "Consider grouping them into an object."
)


class CodeSmellDetector:
    """
    Detects common code smells in JavaScript-like source.

    Usage:
        detector = CodeSmellDetector()
        smells = detector.detect(code)
    """

    def detect(self, code: str) -> List[str]:
        """
        Run every check over the code.

        Args:
            code: Source text

        Returns:
            Human-readable findings, possibly empty
        """
        smells: List[str] = []

        for match in FUNCTION_BODY_PATTERN.finditer(code):
            if _line_count(match.group(0)) > MAX_FUNCTION_LINES:
                smells.append(LONG_FUNCTION_MESSAGE)

        for match in CLASS_BODY_PATTERN.finditer(code):
            if _line_count(match.group(0)) > MAX_CLASS_LINES:
                smells.append(LARGE_CLASS_MESSAGE)

        for match in FUNCTION_PARAMS_PATTERN.finditer(code):
            if len(match.group(1).split(",")) > MAX_PARAMETERS:
                smells.append(TOO_MANY_PARAMETERS_MESSAGE)

        if smells:
            logger.debug("Code smells detected", count=len(smells))

        return smells


def _line_count(text: str) -> int:
    return len(text.split("\n"))
