from fastapi import Depends
from typing import Dict, Optional
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import bcrypt
import jwt
from datetime import datetime, timezone, timedelta
from hospital_api.core.config import JWT_ALGORITHM, JWT_EXPIRY_HOURS, JWT_SECRET
from hospital_api.core.exceptions import AuthError
from hospital_api.modules.auth.models import TokenClaims
from hospital_api.modules.auth.repository import AuthRepository

security = HTTPBearer(auto_error=False)

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

def verify_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))

def create_token(user_id: str, expires_delta: timedelta = None) -> str:
    payload = {
        "sub": user_id,
        "exp": datetime.now(timezone.utc) + (expires_delta or timedelta(hours=JWT_EXPIRY_HOURS))
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)

def decode_token(token: Optional[str]) -> TokenClaims:
    if not token:
        raise AuthError("Token is required")
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthError("Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthError("Invalid token")
    return TokenClaims(user_id=str(user_id))

def bearer_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> Optional[str]:
    return credentials.credentials if credentials else None

async def get_current_user(token: Optional[str] = Depends(bearer_token), auth_repo: AuthRepository = Depends()) -> Dict:
    claims = decode_token(token)
    user = await auth_repo.find_user_by_id(claims.user_id)
    if not user:
        raise AuthError("User not found")
    return user
