"""
Services Package

This package contains all service modules for the AI Code Reviewer:
- ai_engine: text generation interface and OpenAI engine
- chunker: splitting submissions into model-sized pieces
- classifier: code vs. casual text detection
- code_smells: static code smell checks
- review_orchestrator: the review pipeline
- user_store: MongoDB user accounts
"""

from app.services.ai_engine import AIGenerationEngine, AIGenerationError, TextGenerator, get_ai_engine
from app.services.chunker import DEFAULT_CHUNK_SIZE, split_into_chunks
from app.services.classifier import InputClassifier, PatternClassifier
from app.services.code_smells import CodeSmellDetector
from app.services.review_orchestrator import ReviewOrchestrator, get_review_orchestrator
from app.services.user_store import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserRepository,
    UserStoreError,
)

__all__ = [
    "AIGenerationEngine",
    "AIGenerationError",
    "TextGenerator",
    "get_ai_engine",
    "DEFAULT_CHUNK_SIZE",
    "split_into_chunks",
    "InputClassifier",
    "PatternClassifier",
    "CodeSmellDetector",
    "ReviewOrchestrator",
    "get_review_orchestrator",
    "InvalidCredentialsError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "UserRepository",
    "UserStoreError",
]
