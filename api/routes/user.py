from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session
from datetime import datetime
from passlib.context import CryptContext
import structlog

from core.auth import create_access_token, get_current_user
from core.database import get_db
from models.user import User

log = structlog.get_logger()

router = APIRouter(
    prefix="/v1/user",
    tags=["user"]
)

# 비밀번호 해싱 설정
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class LoginRequest(BaseModel):
    username: str
    password: str


class SignupRequest(BaseModel):
    username: str
    password: str
    email: str | None = None
    name: str | None = None
    nationality: str | None = None


class LoginResponse(BaseModel):
    access_token: str
    token_type: str
    user_id: str
    username: str


class UserInfo(BaseModel):
    id: str
    username: str
    email: str | None = None
    name: str | None = None
    nationality: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """비밀번호 검증"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """비밀번호 해싱"""
    return pwd_context.hash(password)


@router.post("/signup", response_model=UserInfo)
async def signup(request: SignupRequest, db: Session = Depends(get_db)):
    """
    사용자 회원가입

    - **username**: 사용자 아이디 (고유)
    - **password**: 비밀번호
    - **email**: 이메일 (선택, 로그 작성 시 서퍼 이메일로 사용)
    """
    # 중복 확인
    existing_user = db.query(User).filter(User.username == request.username).first()
    if existing_user:
        raise HTTPException(status_code=400, detail="Username already exists")

    if request.email:
        existing_email = db.query(User).filter(User.email == request.email).first()
        if existing_email:
            raise HTTPException(status_code=400, detail="Email already in use")

    new_user = User(
        username=request.username,
        password=get_password_hash(request.password),
        email=request.email,
        name=request.name,
        nationality=request.nationality,
    )

    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    log.info("user_signed_up", user_id=new_user.id)
    return new_user


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    사용자 로그인

    - **username**: 사용자 아이디
    - **password**: 비밀번호
    """
    user = db.query(User).filter(User.username == request.username).first()

    if not user or not verify_password(request.password, user.password):
        raise HTTPException(status_code=401, detail="Invalid username or password")

    # sub에는 사용자 ID를 담는다
    access_token = create_access_token(data={"sub": user.id})

    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        user_id=user.id,
        username=user.username
    )


@router.get("/me", response_model=UserInfo)
async def get_me(user: User = Depends(get_current_user)):
    """
    현재 로그인한 사용자 정보 조회

    Authorization 헤더에 Bearer 토큰 필요
    """
    return user
