"""
Service d'authentification et de profil : signup, login, utilisateur courant, objectifs.
"""
import logging

from sqlmodel import Session, select

from app.auth.jwt import jwt_manager, password_manager, TokenResponse
from app.domain.entities import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class AuthService:

    def signup(self, session: Session, user_data: UserCreate) -> TokenResponse:
        existing_user = session.exec(
            select(User).where(User.username == user_data.username)
        ).first()
        if existing_user:
            raise ValueError("Username already exists")

        db_user = User(
            **user_data.model_dump(exclude={"password"}),
            hashed_password=password_manager.hash_password(user_data.password),
        )
        session.add(db_user)
        session.commit()
        session.refresh(db_user)
        logger.info(f"Utilisateur {db_user.id} cree")

        return jwt_manager.create_token_pair(db_user.id, db_user.username)

    def login(self, session: Session, username: str, password: str) -> TokenResponse:
        user = session.exec(
            select(User).where(User.username == username.strip().lower())
        ).first()

        if not user or not password_manager.verify_password(password, user.hashed_password):
            raise ValueError("Incorrect username or password")

        return jwt_manager.create_token_pair(user.id, user.username)

    def get_user(self, session: Session, user_id: int) -> User:
        user = session.get(User, user_id)
        if not user:
            raise ValueError("User not found")
        return user

    def update_profile(self, session: Session, user_id: int, user_updates: UserUpdate) -> User:
        """Met a jour objectifs et mensurations.

        Les Activity deja calculees gardent leurs objectifs jusqu'au prochain recalcul.
        """
        user = self.get_user(session, user_id)

        for field, value in user_updates.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(user, field, value)

        session.add(user)
        session.commit()
        session.refresh(user)
        return user


auth_service = AuthService()
