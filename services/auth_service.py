from sqlalchemy.orm import Session
from models.user import User, UserRole
from utils.security import verify_password, get_password_hash, create_access_token, decode_access_token, mask_sensitive_data
from utils.errors import InvalidCredentials, InvalidOrExpiredToken
from config import settings
from typing import Optional
import logging

logger = logging.getLogger(__name__)

PROFILE_CLAIMS = ("username", "name", "email", "phone", "vehicle", "licenseNumber")

class AuthService:
    @staticmethod
    def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
        """Authenticate user with an exact username and password match"""
        user = db.query(User).filter(User.username == username).first()
        if not user:
            logger.warning(f"Login attempt with unknown username: {mask_sensitive_data(username)}")
            return None
        if not verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for user: {user.id}")
            return None
        logger.info(f"Successful login for user: {user.id}")
        return user

    @staticmethod
    def login(db: Session, username: str, password: str) -> tuple:
        """Issue a token for valid credentials, InvalidCredentials otherwise"""
        user = AuthService.authenticate_user(db, username, password)
        if user is None:
            # Same message whether or not the username exists
            raise InvalidCredentials()
        return AuthService.generate_token(user), user

    @staticmethod
    def create_user(
        db: Session,
        id: int,
        username: str,
        password: str,
        role: UserRole,
        name: str,
        email: str,
        phone: Optional[str] = None,
        vehicle: Optional[str] = None,
        license_number: Optional[str] = None
    ) -> Optional[User]:
        """Create a seeded user, None if the username is taken"""
        existing_user = db.query(User).filter(User.username == username).first()
        if existing_user:
            return None

        user = User(
            id=id,
            username=username,
            password_hash=get_password_hash(password),
            role=role,
            name=name,
            email=email,
            phone=phone,
            vehicle=vehicle,
            license_number=license_number
        )
        db.add(user)
        db.flush()
        logger.info(f"Seeded user: {user.id} with role: {role.value}")
        return user

    @staticmethod
    def generate_token(user: User) -> str:
        """Generate an access token embedding the user's profile"""
        profile = user.profile()
        token_data = {
            "sub": user.username,
            "user_id": user.id,
            "role": user.role.value,
        }
        token_data.update({key: profile[key] for key in PROFILE_CLAIMS if key in profile})
        return create_access_token(data=token_data)

    @staticmethod
    def verify_token(token: str) -> dict:
        """Return the claim set of a valid token, InvalidOrExpiredToken otherwise"""
        payload = decode_access_token(token)
        if payload is None:
            raise InvalidOrExpiredToken()

        user_id = payload.get("user_id")
        role = payload.get("role")
        if not isinstance(user_id, int) or role not in [r.value for r in UserRole]:
            raise InvalidOrExpiredToken()
        return payload

    @staticmethod
    def token_lifetime_seconds() -> int:
        return settings.access_token_expire_minutes * 60
