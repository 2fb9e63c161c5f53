"""
Data Models Module

This module defines all Pydantic models used throughout the application.
Strong typing ensures data integrity and provides clear contracts between components.

Design Decisions:
- Use Pydantic models for all data transfer objects
- Review outcomes are typed results; the human-readable failure message is
  derived from the result, never used as the result itself
- Clear separation between review models and user account models
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Enums
# =============================================================================

class InputKind(str, Enum):
    """What a submission looks like to the classifier."""
    CODE = "code"
    CASUAL_TEXT = "casual_text"


class ReviewStatus(str, Enum):
    """Outcome of a review pipeline run."""
    COMPLETED = "completed"
    PARTIAL_FAILURE = "partial_failure"
    FAILED = "failed"


# Shown to users in place of review text when the pipeline does not complete
CODE_REVIEW_FAILED_MESSAGE = "An error occurred while reviewing the code."
CASUAL_REPLY_FAILED_MESSAGE = (
    "Sorry, I couldn't come up with a reply right now. Please try again later."
)

# Separator placed between per-chunk reviews
SEGMENT_SEPARATOR = "\n\n"


# =============================================================================
# Review Models
# =============================================================================

class ReviewRequest(BaseModel):
    """Body of a review request."""
    code: str = Field(default="", description="Raw submitted text")


class ReviewResult(BaseModel):
    """
    Result of reviewing one submission.

    Attributes:
        kind: How the submission was classified
        status: Whether every generation call succeeded
        segments: Per-chunk responses in chunk order (empty unless completed)
        chunks_total: Number of generation calls the pipeline planned
        chunks_reviewed: Number of generation calls that succeeded
        code_smells: Static findings for code submissions
        failure_reason: Upstream error description when not completed
    """
    kind: InputKind
    status: ReviewStatus
    segments: List[str] = Field(default_factory=list)
    chunks_total: int = Field(default=0, ge=0)
    chunks_reviewed: int = Field(default=0, ge=0)
    code_smells: List[str] = Field(default_factory=list)
    failure_reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        """Check if the review completed."""
        return self.status == ReviewStatus.COMPLETED

    @property
    def failure_message(self) -> str:
        """Get the user-facing message for a non-completed review."""
        if self.kind == InputKind.CASUAL_TEXT:
            return CASUAL_REPLY_FAILED_MESSAGE
        return CODE_REVIEW_FAILED_MESSAGE

    @property
    def text(self) -> str:
        """Get the assembled review, or the failure message."""
        if not self.ok:
            return self.failure_message
        return SEGMENT_SEPARATOR.join(self.segments)


class ReviewResponse(BaseModel):
    """Response body for a completed review."""
    review: str
    kind: InputKind
    status: ReviewStatus
    chunks_total: int
    chunks_reviewed: int
    code_smells: List[str] = []

    @classmethod
    def from_result(cls, result: ReviewResult) -> "ReviewResponse":
        return cls(
            review=result.text,
            kind=result.kind,
            status=result.status,
            chunks_total=result.chunks_total,
            chunks_reviewed=result.chunks_reviewed,
            code_smells=result.code_smells,
        )


# =============================================================================
# User Account Models
# =============================================================================

class SignupRequest(BaseModel):
    """Body of a signup request."""
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Lower-case the email and require an @."""
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v


class LoginRequest(BaseModel):
    """Body of a login request."""
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserPublic(BaseModel):
    """
    A user account as exposed over the API.

    The password hash never leaves the user store.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    email: str
    is_admin: bool = Field(default=False, alias="isAdmin")


class SignupUser(BaseModel):
    username: str
    email: str


class SignupResponse(BaseModel):
    success: bool = True
    message: str
    user: SignupUser


class LoginResponse(BaseModel):
    success: bool = True
    message: str
    user: UserPublic


class StatusResponse(BaseModel):
    success: bool
    message: str
