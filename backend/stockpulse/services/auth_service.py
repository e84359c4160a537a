"""Google Sign-In verification and session tokens.

The session token is a short JWT whose subject is the user id; it is the
only piece of auth state the rest of the app sees.
"""
import logging
from datetime import datetime, timedelta, timezone

from google.auth.transport import requests as google_requests
from google.oauth2 import id_token
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stockpulse.config import Settings, get_settings
from stockpulse.models.user import User

logger = logging.getLogger(__name__)

GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


def create_access_token(user_id: int, settings: Settings) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    return jwt.encode(
        {"sub": str(user_id), "exp": expire},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_user_id(token: str, settings: Settings) -> int | None:
    """Return the user id carried by a session token, or None if it is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    if subject is None:
        return None
    try:
        return int(subject)
    except ValueError:
        return None


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.settings = get_settings()

    async def verify_google_token(self, credential: str) -> dict:
        """Verify a Google Sign-In credential and return its claims."""
        try:
            idinfo = id_token.verify_oauth2_token(
                credential,
                google_requests.Request(),
                self.settings.google_client_id
            )
            if idinfo["iss"] not in GOOGLE_ISSUERS:
                raise ValueError("Invalid issuer")
            return idinfo
        except ValueError as e:
            logger.warning(f"Rejected Google credential: {e}")
            raise ValueError(f"Invalid Google token: {e}")

    async def get_or_create_user(self, google_id: str, email: str, name: str, picture: str | None) -> User:
        result = await self.db.execute(select(User).where(User.google_id == google_id))
        user = result.scalar_one_or_none()

        if user is None:
            user = User(google_id=google_id, email=email, name=name, picture=picture)
            self.db.add(user)
            logger.info(f"Created user for {email}")
        else:
            user.last_login = datetime.now(timezone.utc)
            user.name = name
            user.picture = picture

        await self.db.commit()
        await self.db.refresh(user)
        return user

    def create_access_token(self, user_id: int) -> str:
        return create_access_token(user_id, self.settings)

    async def get_current_user(self, token: str) -> User | None:
        user_id = decode_user_id(token, self.settings)
        if user_id is None:
            return None
        return await self.db.get(User, user_id)
