import logging
from typing import Dict
from hospital_api.core.exceptions import AuthError, ConflictError, ValidationError
from hospital_api.modules.auth.models import User
from hospital_api.modules.auth.repository import AuthRepository
from hospital_api.modules.auth.schemas import MessageResponse, TokenResponse, UserLogin, UserRegister, UserResponse
from hospital_api.modules.auth.utility import hash_password, create_token, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, auth_repo: AuthRepository):
        self.auth_repo = auth_repo

    async def register(self, data: UserRegister) -> MessageResponse:
        if not data.username or not data.email or not data.password:
            raise ValidationError("All fields are required")

        if await self.auth_repo.user_exists(data.email):
            raise ConflictError("User with this email already exists")

        user = User(
            username=data.username,
            email=data.email,
            hashed_password=hash_password(data.password)
        )
        await self.auth_repo.create_user(user)
        logger.info("Registered user %s", user.id)

        return MessageResponse(message="User registered successfully")

    async def login(self, data: UserLogin) -> TokenResponse:
        if not data.email or not data.password:
            raise ValidationError("Email and password are required")

        user = await self.auth_repo.find_user(data.email)
        if not user or not verify_password(data.password, user["hashed_password"]):
            raise AuthError("Invalid credentials")

        return TokenResponse(access_token=create_token(user["id"]))

    async def get_me(self, current_user: Dict) -> UserResponse:
        return UserResponse(
            id=current_user["id"],
            username=current_user["username"],
            email=current_user["email"],
            created_at=current_user.get("created_at")
        )
