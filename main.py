from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import os
import structlog
from dotenv import load_dotenv

from api.routes import raid_logs, beaches, forecasts, alerts, sponsors, user
from core.log import setup_logging

load_dotenv()

log = structlog.get_logger()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 시작/종료 시 실행되는 lifespan 이벤트"""
    setup_logging()
    log.info("server_started", cors_origins=CORS_ORIGINS)
    yield
    log.info("server_stopped")


app = FastAPI(
    title="Surf Raid API",
    description="서핑 세션 기록, 해변 점수 및 알림 API",
    version="1.0.0",
    lifespan=lifespan
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(raid_logs.router, prefix="/api")
app.include_router(beaches.router, prefix="/api")
app.include_router(forecasts.router, prefix="/api")
app.include_router(alerts.router, prefix="/api")
app.include_router(sponsors.router, prefix="/api")
app.include_router(user.router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "Surf Raid API", "version": "1.0.0"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
