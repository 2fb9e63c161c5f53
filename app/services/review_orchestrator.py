"""
Review Orchestrator Module

This module turns a submission of any length into a review (or a casual
reply) by delegating to a text generator.

Pipeline:
    classify -> (chunk -> generate per chunk -> join) | (single generate)

Design Decisions:
- Chunks are reviewed strictly one after another, never in parallel
- Fail fast: the first failed chunk aborts the run, partial output is dropped
- Any exception from the generator counts as a failed call; cancellation
  still propagates
- Return a typed ReviewResult instead of overloading the text channel
- No timeout here; callers wrap review() when they need one
"""

from typing import List, Optional

from app.config import get_settings
from app.logging_config import get_logger
from app.models import InputKind, ReviewResult, ReviewStatus
from app.services.ai_engine import TextGenerator, get_ai_engine
from app.services.chunker import DEFAULT_CHUNK_SIZE, split_into_chunks
from app.services.classifier import InputClassifier, PatternClassifier
from app.services.code_smells import CodeSmellDetector

logger = get_logger(__name__)

EMPTY_SUBMISSION_REASON = "Nothing to review: the submission is empty"


class ReviewOrchestrator:
    """
    Coordinates classification, chunking and generation for one submission.

    Usage:
        orchestrator = ReviewOrchestrator(generator)
        result = await orchestrator.review(text)
        print(result.text)
    """

    CODE_REVIEW_INSTRUCTION = """You are a senior code reviewer with over 7 years of development experience.

Your role is to:
- Analyze code for quality, best practices, efficiency, scalability and readability.
- Provide constructive feedback tailored to the code's state (erroneous or error-free).
- Detect the programming language automatically and mention it explicitly in the review.
- Detect code smells that indicate poor design choices and suggest improvements.

Structure the response strictly using this format:

**Detected Language:**
<language name>

For erroneous code:
- **Bad Code:** (show the incorrect code snippet)
- **Issues:** (list detected problems)
- **Recommended Fix:** (provide the corrected version)
- **Improvements:** (additional optimizations)
- **Final Note:** (summary of findings)

For error-free code:
- **Good Code:** (show the correct code snippet)
- **Recommended Improvements:** (if applicable)
- **Code Smells:** (if applicable)
- **Final Note:** (summary of findings)

Review guidelines:
- You may receive one section of a longer file; review what you are given and say so when it looks incomplete.
- Keep a friendly, constructive tone while staying precise."""

    CASUAL_INSTRUCTION = """You are a friendly assistant for a code review tool.
The user sent a message that is not source code. Reply briefly and conversationally,
and mention that you can review code if they paste some."""

    def __init__(
        self,
        generator: TextGenerator,
        classifier: Optional[InputClassifier] = None,
        smell_detector: Optional[CodeSmellDetector] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """
        Initialize the orchestrator.

        Args:
            generator: Async text generator used for every model call
            classifier: Code/casual classifier (PatternClassifier by default)
            smell_detector: Static smell checks (CodeSmellDetector by default)
            chunk_size: Maximum characters per generation call

        Raises:
            ValueError: If chunk_size is not positive
        """
        if chunk_size <= 0:
            raise ValueError(f"Chunk size must be positive, got {chunk_size}")

        self.generator = generator
        self.classifier = classifier or PatternClassifier()
        self.smell_detector = smell_detector or CodeSmellDetector()
        self.chunk_size = chunk_size

    def classify(self, text: str) -> InputKind:
        """Classify a submission as code or casual text."""
        return self.classifier.classify(text)

    def chunk(self, text: str, size: Optional[int] = None) -> List[str]:
        """Split text into chunks of at most ``size`` (default: configured) characters."""
        return split_into_chunks(text, self.chunk_size if size is None else size)

    async def review(self, text: str) -> ReviewResult:
        """
        Review a submission, dispatching on its classification.

        Args:
            text: Raw submitted text

        Returns:
            ReviewResult for the code or casual path
        """
        kind = self.classify(text)
        logger.info("Submission classified", kind=kind.value, length=len(text))

        if kind == InputKind.CASUAL_TEXT:
            return await self.review_casual_text(text)
        return await self.review_code(text)

    async def review_code(self, code: str) -> ReviewResult:
        """
        Review code chunk by chunk.

        Each chunk gets its own generation call, awaited before the next one
        is sent. The first failure aborts the remaining chunks. Empty code
        is a failed review, since there is nothing to send.

        Args:
            code: Source text

        Returns:
            ReviewResult with one segment per chunk when completed
        """
        chunks = self.chunk(code)
        code_smells = self.smell_detector.detect(code)

        if not chunks:
            logger.warning("Empty code submission, nothing to review")
            return ReviewResult(
                kind=InputKind.CODE,
                status=ReviewStatus.FAILED,
                failure_reason=EMPTY_SUBMISSION_REASON,
            )

        segments: List[str] = []

        for index, chunk in enumerate(chunks):
            prompt = self._build_code_prompt(chunk, index, len(chunks))

            try:
                segment = await self.generator.generate(prompt, self.CODE_REVIEW_INSTRUCTION)
            except Exception as e:
                logger.error(
                    "Error generating review for chunk",
                    chunk=index + 1,
                    chunks_total=len(chunks),
                    error=str(e),
                    error_type=type(e).__name__
                )
                return ReviewResult(
                    kind=InputKind.CODE,
                    status=ReviewStatus.PARTIAL_FAILURE if segments else ReviewStatus.FAILED,
                    chunks_total=len(chunks),
                    chunks_reviewed=len(segments),
                    code_smells=code_smells,
                    failure_reason=str(e),
                )

            segments.append(segment)

        result = ReviewResult(
            kind=InputKind.CODE,
            status=ReviewStatus.COMPLETED,
            segments=segments,
            chunks_total=len(chunks),
            chunks_reviewed=len(segments),
            code_smells=code_smells,
        )

        logger.info("Code review completed", chunks_total=len(chunks), smells=len(code_smells))
        logger.debug("Assembled review", review=result.text)
        return result

    async def review_casual_text(self, text: str) -> ReviewResult:
        """
        Reply to casual text with a single generation call.

        Args:
            text: Submitted message, passed verbatim

        Returns:
            ReviewResult holding the raw model reply when completed
        """
        try:
            reply = await self.generator.generate(
                self._build_casual_prompt(text),
                self.CASUAL_INSTRUCTION
            )
        except Exception as e:
            logger.error(
                "Error generating casual reply",
                error=str(e),
                error_type=type(e).__name__
            )
            return ReviewResult(
                kind=InputKind.CASUAL_TEXT,
                status=ReviewStatus.FAILED,
                chunks_total=1,
                failure_reason=str(e),
            )

        logger.debug("Casual reply generated", reply=reply)
        return ReviewResult(
            kind=InputKind.CASUAL_TEXT,
            status=ReviewStatus.COMPLETED,
            segments=[reply],
            chunks_total=1,
            chunks_reviewed=1,
        )

    def _build_code_prompt(self, chunk: str, index: int, total: int) -> str:
        """Build the per-chunk review prompt."""
        prompt_parts = []

        if total > 1:
            prompt_parts.append(f"This is part {index + 1} of {total} of a larger submission.\n")

        prompt_parts.append(
            "Analyze the following code and provide a structured review "
            "based on detected errors and improvements:\n"
        )
        prompt_parts.append(f"```\n{chunk}\n```\n")
        prompt_parts.append("Respond strictly in the review output format.")

        return "\n".join(prompt_parts)

    def _build_casual_prompt(self, text: str) -> str:
        return f"The user says:\n\n```\n{text}\n```\n\nRespond in a friendly way."


def get_review_orchestrator() -> ReviewOrchestrator:
    """Build an orchestrator wired to the shared AI engine and configured chunk size."""
    return ReviewOrchestrator(
        generator=get_ai_engine(),
        chunk_size=get_settings().review_chunk_size,
    )
