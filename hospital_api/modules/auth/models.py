from pydantic import BaseModel, ConfigDict, Field, EmailStr
from datetime import datetime, timezone
import uuid


class User(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    username: str
    email: EmailStr
    hashed_password: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class TokenClaims(BaseModel):
    """Verified contents of a bearer token."""
    user_id: str

    def owns(self, user: dict) -> bool:
        return user is not None and user.get("id") == self.user_id
