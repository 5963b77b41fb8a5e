"""
In-memory store of pending password-reset codes.

Each email maps to at most one ``OtpRecord``; writing a new record for an
email replaces the previous one. Expired records stay in place until they
are overwritten, consumed, or dropped by ``purge_expired``. Nothing is
persisted, so pending codes do not survive a restart.
"""

import asyncio
import secrets
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from pydantic import BaseModel

OTP_MIN = 100000
OTP_MAX = 999999


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_otp() -> str:
    """Uniformly random 6-digit code in [100000, 999999]."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


class OtpRecord(BaseModel):
    otp: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


class OtpStore:
    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock
        self._records: Dict[str, OtpRecord] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock(self, email: str) -> asyncio.Lock:
        """Per-email lock for read-check-write sequences."""
        lock = self._locks.get(email)
        if lock is None:
            lock = self._locks[email] = asyncio.Lock()
        return lock

    def get(self, email: str) -> Optional[OtpRecord]:
        return self._records.get(email)

    def put(self, email: str, record: OtpRecord) -> None:
        self._records[email] = record

    def delete(self, email: str) -> None:
        self._records.pop(email, None)

    def purge_expired(self) -> int:
        now = self.clock()
        expired = [email for email, record in self._records.items() if record.is_expired(now)]
        for email in expired:
            del self._records[email]
        for email in list(self._locks):
            if email not in self._records and not self._locks[email].locked():
                del self._locks[email]
        return len(expired)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, email: str) -> bool:
        return email in self._records
