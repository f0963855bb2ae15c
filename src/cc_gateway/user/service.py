"""User domain service: credential checks and token issue.

Users are provisioned by migration; there is no self-registration.
HTTP Basic re-checks the bcrypt hash on every request, so the check runs in
the threadpool to keep the event loop free.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from src.cc_common.errors import AccountDisabledError, InvalidCredentialsError
from src.cc_gateway.auth.jwt_handler import create_access_token
from src.cc_gateway.auth.password import verify_password
from src.cc_gateway.user.db_models import UserModel


class UserService:
    """Stateless service — instantiate once, reuse across requests."""

    async def get_by_username(self, username: str, db: AsyncSession) -> UserModel | None:
        result = await db.execute(
            select(UserModel).where(UserModel.username == username)
        )
        return result.scalar_one_or_none()

    async def authenticate(
        self,
        username: str,
        password: str,
        db: AsyncSession,
    ) -> UserModel:
        """Return the user whose credentials match.

        Note: "User not found" and "Wrong password" both raise InvalidCredentialsError
        intentionally — prevents username enumeration attacks.
        """
        user = await self.get_by_username(username, db)
        if user is None or not await run_in_threadpool(
            verify_password, password, user.password_hash
        ):
            raise InvalidCredentialsError()

        if not user.is_active:
            raise AccountDisabledError()

        return user

    async def login(
        self,
        username: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[UserModel, str]:
        """Authenticate user and return (user, access_token)."""
        user = await self.authenticate(username, password, db)
        return user, create_access_token(user.username)
