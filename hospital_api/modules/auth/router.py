from fastapi import APIRouter, Depends
from typing import Dict
from hospital_api.modules.auth.schemas import MessageResponse, TokenResponse, UserLogin, UserRegister, UserResponse
from hospital_api.modules.auth.service import AuthService
from hospital_api.modules.auth.dependencies import get_auth_service
from hospital_api.modules.auth.utility import get_current_user

auth_router = APIRouter(prefix="/auth", tags=["Auth"])

@auth_router.post("/register", response_model=MessageResponse, status_code=201)
async def register(
    data: UserRegister,
    service: AuthService = Depends(get_auth_service)
    ):
    return await service.register(data)

@auth_router.post("/login", response_model=TokenResponse)
async def login(
    data: UserLogin,
    service: AuthService = Depends(get_auth_service)
    ):
    return await service.login(data)

@auth_router.get("/me", response_model=UserResponse)
async def get_me(
     current_user: Dict = Depends(get_current_user),
     service: AuthService = Depends(get_auth_service)
    ):
     return await service.get_me(current_user)
