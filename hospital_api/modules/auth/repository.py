from datetime import datetime, timezone
from pymongo.errors import DuplicateKeyError

from hospital_api.core.database import mongodb
from hospital_api.core.exceptions import ConflictError
from hospital_api.modules.auth.models import User


def duplicate_field(error: DuplicateKeyError) -> str:
    key_pattern = (error.details or {}).get("keyPattern") or {}
    return next(iter(key_pattern), "email")


class AuthRepository:
    async def user_exists(self, email: str) -> bool:
        return await mongodb.db.users.find_one({"email": email}) is not None

    async def create_user(self, user: User) -> dict:
        data = user.model_dump()
        try:
            await mongodb.db.users.insert_one(data)
        except DuplicateKeyError as e:
            field = duplicate_field(e)
            raise ConflictError(f"User with this {field} already exists")
        data.pop("_id", None)
        return data

    async def find_user(self, email: str) -> dict:
        return await mongodb.db.users.find_one({"email": email}, {"_id": 0})

    async def find_user_by_id(self, id: str) -> dict:
        return await mongodb.db.users.find_one({"id": id}, {"_id": 0})

    async def update_password(self, email: str, hashed_password: str) -> bool:
        result = await mongodb.db.users.update_one(
            {"email": email},
            {
                "$set": {
                    "hashed_password": hashed_password,
                    "updated_at": datetime.now(timezone.utc),
                }
            }
        )
        return result.matched_count == 1
