"""Registration and login."""
from fastapi import APIRouter, Depends, HTTPException, status

from skillbridge.core.security import create_access_token
from skillbridge.interfaces.http.deps import get_user_service, get_wallet_service
from skillbridge.modules.users import UserCreateInput, UserService
from skillbridge.modules.wallets import WalletService
from skillbridge.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED, summary="Create an account")
async def register(
    payload: RegisterRequest,
    user_service: UserService = Depends(get_user_service),
    wallet_service: WalletService = Depends(get_wallet_service),
) -> AuthResponse:
    user = await user_service.register(
        UserCreateInput(name=payload.name, email=payload.email, password=payload.password)
    )
    await wallet_service.get_or_create_wallet(user.id)
    return AuthResponse(
        access_token=create_access_token(user.id, user.email),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse, summary="Exchange credentials for a bearer token")
async def login(payload: LoginRequest, user_service: UserService = Depends(get_user_service)) -> AuthResponse:
    user = await user_service.authenticate(payload.email, payload.password)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    return AuthResponse(
        access_token=create_access_token(user.id, user.email),
        user=UserResponse.model_validate(user),
    )
