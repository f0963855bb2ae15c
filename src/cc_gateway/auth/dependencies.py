"""FastAPI dependencies: get_current_user, require_card_owner.

Credentials may arrive as HTTP Basic (username/password) or as a Bearer
access token issued by POST /auth/login. Both resolve to a UserModel whose
username is the request principal.

Usage in any protected router:
    from src.cc_gateway.auth.dependencies import require_card_owner

    @router.get("/protected")
    async def protected(user: UserModel = Depends(require_card_owner)):
        ...
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials, OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_common.database import get_db_session
from src.cc_common.errors import AccountDisabledError, CardOwnerRequiredError, InvalidCredentialsError
from src.cc_gateway.auth.jwt_handler import decode_token
from src.cc_gateway.user.db_models import ROLE_CARD_OWNER, UserModel
from src.cc_gateway.user.service import UserService

# auto_error=False: each scheme yields None when the header uses the other one
basic_scheme = HTTPBasic(auto_error=False)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

_user_service = UserService()


def _credentials_exception(scheme: str) -> HTTPException:
    """401 with the WWW-Authenticate challenge matching the attempted scheme."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or missing credentials",
        headers={"WWW-Authenticate": scheme},
    )


async def get_current_user(
    credentials: HTTPBasicCredentials | None = Depends(basic_scheme),
    token: str | None = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> UserModel:
    """Resolve Basic credentials or a Bearer token to an active user.

    Raises HTTP 401 if credentials are missing, invalid, or expired.
    Raises HTTP 403 (AccountDisabledError) if the user account is disabled.
    """
    if credentials is not None:
        try:
            return await _user_service.authenticate(
                credentials.username, credentials.password, db
            )
        except InvalidCredentialsError:
            raise _credentials_exception("Basic") from None

    if token is None:
        raise _credentials_exception("Basic")

    try:
        payload = decode_token(token)
    except InvalidCredentialsError:
        raise _credentials_exception("Bearer") from None

    username: str | None = payload.get("sub")
    if not username:
        raise _credentials_exception("Bearer")

    user = await _user_service.get_by_username(username, db)
    if user is None:
        raise _credentials_exception("Bearer")

    if not user.is_active:
        raise AccountDisabledError()

    return user


async def require_card_owner(
    current_user: UserModel = Depends(get_current_user),
) -> UserModel:
    """Verify the caller holds the card-owner role.

    Raises HTTP 403 (CardOwnerRequiredError) otherwise. Ownership of a
    particular card is checked later, by the cash card service.
    """
    if current_user.role != ROLE_CARD_OWNER:
        raise CardOwnerRequiredError()
    return current_user
