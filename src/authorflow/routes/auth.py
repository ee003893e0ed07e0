"""Signup and login endpoints."""

from fastapi import APIRouter, Depends

from authorflow.models.responses import LoginResponse, SignupResponse
from authorflow.models.user import LoginRequest, SignupRequest
from authorflow.services.auth_service import AuthService
from authorflow.services.container import get_auth_service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/signup",
    response_model=SignupResponse,
    summary="Sign Up",
    description="Create an account with the identity provider and a free-tier profile.",
)
async def signup(
    request: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SignupResponse:
    """
    Create an account.

    The provider account is created first, then the profile row. A failed
    profile write is logged but still reported as a successful signup.
    """
    identity = await auth_service.sign_up(request.email, request.password, request.username)
    return SignupResponse(user=identity)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log In",
    description="Exchange email and password for a session.",
)
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Log in.

    `session.access_token` is the bearer token for the project endpoints.
    """
    identity, session = await auth_service.sign_in(request.email, request.password)
    return LoginResponse(user=identity, session=session)
