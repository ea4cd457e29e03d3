"""
Gestion des tokens JWT pour l'authentification
"""
from datetime import datetime, timedelta
from typing import Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import HTTPException, status
from pydantic import BaseModel

from app.core.settings import get_settings

settings = get_settings()

# Configuration du hashage des mots de passe
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenData(BaseModel):
    """Données contenues dans un token"""
    user_id: int
    username: str
    exp: datetime


class TokenResponse(BaseModel):
    """Réponse d'authentification avec tokens"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class JWTManager:
    """Gestionnaire des tokens JWT"""

    def __init__(self):
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.access_token_expire_minutes = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
        self.refresh_token_expire_days = settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS

    def _encode(self, data: Dict[str, Any], expires_delta: timedelta, token_type: str) -> str:
        to_encode = data.copy()
        to_encode.update({"exp": datetime.utcnow() + expires_delta, "type": token_type})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def create_access_token(self, data: Dict[str, Any]) -> str:
        """Crée un access token JWT"""
        return self._encode(data, timedelta(minutes=self.access_token_expire_minutes), "access")

    def create_refresh_token(self, data: Dict[str, Any]) -> str:
        """Crée un refresh token JWT"""
        return self._encode(data, timedelta(days=self.refresh_token_expire_days), "refresh")

    def create_token_pair(self, user_id: int, username: str) -> TokenResponse:
        """Crée une paire access/refresh token"""
        token_data = {"sub": str(user_id), "username": username}

        return TokenResponse(
            access_token=self.create_access_token(token_data),
            refresh_token=self.create_refresh_token(token_data),
            expires_in=self.access_token_expire_minutes * 60
        )

    def verify_token(self, token: str, token_type: str = "access") -> TokenData:
        """Vérifie et décode un token JWT"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Could not validate credentials"
            )

        # Vérifier le type de token
        if payload.get("type") != token_type:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"Invalid token type. Expected {token_type}"
            )

        subject = payload.get("sub")
        username = payload.get("username")
        if subject is None or username is None or not str(subject).isdigit():
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token payload"
            )

        return TokenData(
            user_id=int(subject),
            username=username,
            exp=datetime.fromtimestamp(payload.get("exp")),
        )

    def refresh_access_token(self, refresh_token: str) -> str:
        """Génère un nouvel access token à partir d'un refresh token"""
        token_data = self.verify_token(refresh_token, token_type="refresh")
        return self.create_access_token({"sub": str(token_data.user_id), "username": token_data.username})


class PasswordManager:
    """Gestionnaire des mots de passe"""

    @staticmethod
    def hash_password(password: str) -> str:
        """Hashe un mot de passe"""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Vérifie un mot de passe"""
        return pwd_context.verify(plain_password, hashed_password)


# Instances globales
jwt_manager = JWTManager()
password_manager = PasswordManager()


def get_current_user_id(token: str) -> int:
    """Extrait l'ID utilisateur du token (pour dependency injection)"""
    token_data = jwt_manager.verify_token(token)
    return token_data.user_id
