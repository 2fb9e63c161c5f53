"""
User Account Handler Module

FastAPI endpoints for signup, login and user administration.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pymongo.errors import PyMongoError

from app.logging_config import get_logger
from app.models import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
    SignupUser,
    StatusResponse,
    UserPublic,
)
from app.services.user_store import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserRepository,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["users"])


def get_user_repository(request: Request) -> UserRepository:
    """Get the repository opened during application startup."""
    return request.app.state.user_repository


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    repository: UserRepository = Depends(get_user_repository),
) -> SignupResponse:
    try:
        user = await repository.create_user(body)
    except UserAlreadyExistsError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists"
        )
    except PyMongoError as e:
        logger.error("Signup error", error=str(e), error_type=type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error"
        )

    return SignupResponse(
        message="User registered successfully",
        user=SignupUser(username=user.username, email=user.email),
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    repository: UserRepository = Depends(get_user_repository),
) -> LoginResponse:
    try:
        user = await repository.authenticate(body.email, body.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )
    except PyMongoError as e:
        logger.error("Login error", error=str(e), error_type=type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error"
        )

    return LoginResponse(message="Login successful", user=user)


@router.get("/users", response_model=List[UserPublic])
async def list_users(
    repository: UserRepository = Depends(get_user_repository),
) -> List[UserPublic]:
    try:
        return await repository.list_users()
    except PyMongoError as e:
        logger.error("Error fetching users", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch users"
        )


@router.delete("/users/{user_id}", response_model=StatusResponse)
async def delete_user(
    user_id: str,
    repository: UserRepository = Depends(get_user_repository),
) -> StatusResponse:
    try:
        await repository.delete_user(user_id)
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    except PyMongoError as e:
        logger.error("Error deleting user", user_id=user_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete user"
        )

    return StatusResponse(success=True, message="User deleted successfully")
