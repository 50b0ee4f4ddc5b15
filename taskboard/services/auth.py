"""Authentication service: password hashing, session tokens and OTP login."""

import logging
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from taskboard.config import Settings, get_settings
from taskboard.errors import (
    AuthError,
    ConflictError,
    DeliveryError,
    ExpiredTokenError,
    InvalidTokenError,
    NotFoundError,
)
from taskboard.models.enums import UserRole
from taskboard.models.otp import OTP
from taskboard.models.user import User
from taskboard.repositories.ports import OTPRepository, UserRepository
from taskboard.services.email import Mailer

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_OTP = "Invalid or expired OTP"
INACTIVE_ACCOUNT = "Account is inactive"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, email: str, settings: Settings | None = None) -> str:
    """Create a JWT access token."""
    settings = settings or get_settings()
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings | None = None) -> dict:
    """Decode and validate a JWT token.

    Raises:
        ExpiredTokenError: the signature is valid but the token has expired.
        InvalidTokenError: anything else wrong with the token, including a
            missing or non-numeric subject.
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as e:
        raise ExpiredTokenError() from e
    except JWTError as e:
        raise InvalidTokenError() from e

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise InvalidTokenError()
    return payload


def generate_otp_code() -> str:
    """Six-digit code drawn uniformly from 100000-999999."""
    return str(100000 + secrets.randbelow(900000))


class AuthService:
    """Registration and the three ways of obtaining a session token."""

    def __init__(
        self,
        users: UserRepository,
        otps: OTPRepository,
        mailer: Mailer,
        settings: Settings | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.users = users
        self.otps = otps
        self.mailer = mailer
        self.settings = settings or get_settings()
        self.clock = clock or (lambda: datetime.now(UTC))

    def _issue_token(self, user: User) -> str:
        return create_access_token(user.id, user.email, self.settings)

    def register(
        self, name: str, email: str, password: str, role: UserRole = UserRole.USER
    ) -> tuple[User, str]:
        """Create an account and return it with a fresh session token."""
        if self.users.get_by_email(email):
            raise ConflictError("User already exists")

        user = User(
            name=name,
            email=email,
            password_hash=get_password_hash(password),
            role=role,
            is_active=True,
        )
        user = self.users.add(user)
        logger.info(f"Registered user {user.id} with role {user.role.value}")
        return user, self._issue_token(user)

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Password login.

        Unknown emails and wrong passwords produce the same error, and the
        inactive check only runs once the password matched.
        """
        user = self.users.get_by_email(email)
        if user is None:
            # Burn a hash round so response time does not reveal unknown emails
            pwd_context.dummy_verify()
            raise AuthError(INVALID_CREDENTIALS)
        if not verify_password(password, user.password_hash):
            logger.info(f"Failed password login for user {user.id}")
            raise AuthError(INVALID_CREDENTIALS)
        if not user.is_active:
            raise AuthError(INACTIVE_ACCOUNT)
        return user, self._issue_token(user)

    def request_otp(self, email: str) -> int:
        """Issue and email a one-time passcode.

        Returns the passcode lifetime in minutes; the code itself is only
        ever sent to the user's inbox.
        """
        user = self.users.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")

        minutes = self.settings.otp_expiration_minutes
        code = generate_otp_code()
        self.otps.add(
            OTP(
                email=email,
                code=code,
                expires_at=self.clock() + timedelta(minutes=minutes),
                is_used=False,
            )
        )

        if not self.mailer.send_otp_email(email, code, minutes):
            raise DeliveryError("Failed to send OTP email")

        logger.info(f"Issued OTP for user {user.id}")
        return minutes

    def verify_otp(self, email: str, code: str) -> tuple[User, str]:
        """Exchange an unused, unexpired passcode for a session token."""
        otp = self.otps.find_valid(email, code, self.clock())
        if otp is None or not self.otps.consume(otp.id):
            raise AuthError(INVALID_OTP)

        user = self.users.get_by_email(email)
        if user is None:
            raise AuthError(INVALID_OTP)
        if not user.is_active:
            raise AuthError(INACTIVE_ACCOUNT)

        logger.info(f"OTP login for user {user.id}")
        return user, self._issue_token(user)
