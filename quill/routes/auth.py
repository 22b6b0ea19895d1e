"""Authentication routes for registration and login."""

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse

from quill.decorators import timed
from quill.dependencies import AuthServiceDep
from quill.schemas.auth import AuthResponse, LoginRequest, RegisterRequest

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])

TOKEN_EXAMPLE = {
    "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "username": "alice",
}


@router.post(
    "/register",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    summary="Register a new account",
    description="Create an account and receive an access token for it.",
    responses={
        200: {"content": {"application/json": {"example": TOKEN_EXAMPLE}}},
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {
                    "example": {"detail": "Username or email already exists"},
                },
            },
        },
    },
    operation_id="auth_register",
)
@timed("/auth/register")
async def register(payload: RegisterRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """
    Register a new user.

    Parameters
    ----------
    payload : RegisterRequest
        Username, email and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    AuthResponse
        Access token and username.

    Raises
    ------
    DuplicateIdentityError
        If the username or email is already registered.
    """
    return await auth_service.register(payload)


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    summary="Login for access token",
    description="Authenticate with email and password to obtain an access token.",
    responses={
        200: {"content": {"application/json": {"example": TOKEN_EXAMPLE}}},
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {"example": {"detail": "Invalid email or password"}},
            },
        },
    },
    operation_id="auth_login",
)
@timed("/auth/login")
async def login(payload: LoginRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """
    Login with email and password.

    Parameters
    ----------
    payload : LoginRequest
        Email and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    AuthResponse
        Access token and username.

    Raises
    ------
    InvalidCredentialsError
        If the email is unknown or the password is wrong.
    """
    return await auth_service.login(payload)
