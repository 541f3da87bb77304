"""Registration and login endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from vidshare.api.dependencies import get_container
from vidshare.models.api import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from vidshare.services.container import ServiceContainer

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, services: ServiceContainer = Depends(get_container)) -> AuthResponse:
    result = services.auth.register(payload)
    return AuthResponse(
        message="User registered successfully",
        token=result.token,
        user=UserResponse.from_user(result.user),
    )


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, services: ServiceContainer = Depends(get_container)) -> AuthResponse:
    result = services.auth.login(str(payload.email), payload.password)
    return AuthResponse(
        message="Login successful",
        token=result.token,
        user=UserResponse.from_user(result.user),
    )
