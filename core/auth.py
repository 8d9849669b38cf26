"""
JWT 인증 모듈
API 엔드포인트에서 사용할 호출자(Caller) 식별 의존성을 제공합니다.

읽기 경로는 익명 호출을 허용하고(get_caller), 쓰기 경로는 인증을 요구합니다(require_caller).
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import jwt
import os
from dotenv import load_dotenv

from core.database import get_db
from models.user import User

load_dotenv()

# 토큰이 없어도 익명으로 처리하기 위해 auto_error=False
security = HTTPBearer(auto_error=False)

# JWT 설정
SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "your-secret-key-change-this")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))


@dataclass(frozen=True)
class Caller:
    """요청을 보낸 인증 사용자"""
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None


def create_access_token(data: dict) -> str:
    """JWT 액세스 토큰 생성"""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """
    JWT 토큰을 검증하고 payload를 반환합니다.

    Raises:
        HTTPException: 토큰이 유효하지 않거나 만료된 경우
    """
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    현재 인증된 사용자를 반환합니다.

    Raises:
        HTTPException: 토큰이 없거나, 유효하지 않거나, 사용자를 찾을 수 없는 경우
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")

    payload = decode_access_token(credentials.credentials)
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token has no subject")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="Unauthorized")

    return user


def get_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Optional[Caller]:
    """
    호출자를 반환합니다. 토큰이 없거나 유효하지 않으면 익명(None)으로 취급합니다.
    """
    if credentials is None:
        return None

    try:
        user = get_current_user(credentials, db)
    except HTTPException:
        return None

    return Caller(user_id=user.id, email=user.email, name=user.name)


def require_caller(user: User = Depends(get_current_user)) -> Caller:
    """인증된 호출자를 요구합니다 (없으면 401)"""
    return Caller(user_id=user.id, email=user.email, name=user.name)
