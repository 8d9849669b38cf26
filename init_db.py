"""
데이터베이스 초기화 스크립트

이 스크립트를 실행하면:
1. 데이터베이스 테이블을 생성합니다
2. 초기 관리자 / 테스트 계정을 생성합니다
3. 기본 지역, 해변, 스폰서 데이터를 넣습니다
"""
import sys

import structlog
from passlib.context import CryptContext
from sqlalchemy.exc import SQLAlchemyError

from core.database import init_db, SessionLocal
from core.log import setup_logging
from models.beach import Beach
from models.region import Region
from models.sponsor import Sponsor
from models.user import User

log = structlog.get_logger()

# bcrypt 설정 (rounds를 12로 설정하여 안전성 확보)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12
)

INITIAL_USERS = [
    {"username": "admin", "password": "admin123", "email": "admin@example.com", "name": "Admin"},
    {"username": "test", "password": "test123", "email": "test@example.com", "name": "Test Surfer"},
]

INITIAL_REGIONS = [
    {"name": "Western Cape", "country": "South Africa", "continent": "Africa"},
    {"name": "Eastern Cape", "country": "South Africa", "continent": "Africa"},
    {"name": "Algarve", "country": "Portugal", "continent": "Europe"},
]

INITIAL_BEACHES = [
    {
        "name": "Muizenberg", "region": "Western Cape",
        "wave_type": "Beach Break", "difficulty": "Beginner", "crime_level": "Medium",
        "has_shark_attack": True, "optimal_wind_directions": "NW,N",
        "optimal_swell_directions": "S,SW", "swell_size_min": 0.6, "swell_size_max": 1.8,
        "ideal_swell_period_min": 9,
    },
    {
        "name": "Long Beach", "region": "Western Cape",
        "wave_type": "Beach Break", "difficulty": "Intermediate", "crime_level": "Low",
        "has_shark_attack": False, "optimal_wind_directions": "SE,E",
        "optimal_swell_directions": "W,SW", "swell_size_min": 1.0, "swell_size_max": 2.5,
        "ideal_swell_period_min": 11,
    },
    {
        "name": "Jeffreys Bay", "region": "Eastern Cape",
        "wave_type": "Point Break", "difficulty": "Advanced", "crime_level": "Medium",
        "has_shark_attack": True, "optimal_wind_directions": "W,NW",
        "optimal_swell_directions": "SW,S", "swell_size_min": 1.5, "swell_size_max": 3.5,
        "ideal_swell_period_min": 13, "is_hidden_gem": False,
    },
    {
        "name": "Arrifana", "region": "Algarve",
        "wave_type": "Beach Break", "difficulty": "Intermediate", "crime_level": "Low",
        "has_shark_attack": False, "optimal_wind_directions": "E,NE",
        "optimal_swell_directions": "W,NW", "swell_size_min": 0.8, "swell_size_max": 2.2,
        "ideal_swell_period_min": 10, "is_hidden_gem": True,
    },
]

INITIAL_SPONSORS = [
    {"name": "Wax Co.", "logo": "/sponsors/wax-co.png", "link": "https://example.com/wax"},
    {"name": "Board Shack", "logo": "/sponsors/board-shack.png", "link": "https://example.com/boards"},
]


def create_initial_users(db):
    """초기 사용자 생성"""
    for data in INITIAL_USERS:
        if db.query(User).filter(User.username == data["username"]).first():
            log.info("user_exists", username=data["username"])
            continue

        user = User(
            username=data["username"],
            password=pwd_context.hash(data["password"]),
            email=data["email"],
            name=data["name"],
        )
        db.add(user)
        log.info("user_created", username=data["username"])


def create_initial_beaches(db):
    """지역 / 해변 기본 데이터 생성"""
    regions = {}
    for data in INITIAL_REGIONS:
        region = db.query(Region).filter(Region.name == data["name"]).first()
        if not region:
            region = Region(**data)
            db.add(region)
            db.flush()
            log.info("region_created", name=region.name)
        regions[region.name] = region

    for data in INITIAL_BEACHES:
        if db.query(Beach).filter(Beach.name == data["name"]).first():
            continue
        values = {k: v for k, v in data.items() if k != "region"}
        db.add(Beach(region_id=regions[data["region"]].id, **values))
        log.info("beach_created", name=data["name"])


def create_initial_sponsors(db):
    for data in INITIAL_SPONSORS:
        if not db.query(Sponsor).filter(Sponsor.name == data["name"]).first():
            db.add(Sponsor(**data))


def main():
    setup_logging()
    db = SessionLocal()

    try:
        log.info("creating_tables")
        init_db()

        create_initial_users(db)
        create_initial_beaches(db)
        create_initial_sponsors(db)
        db.commit()
        log.info("init_db_complete")
    except (SQLAlchemyError, ValueError):
        # passlib/bcrypt 버전이 맞지 않으면 ValueError가 날 수 있음 (bcrypt==4.0.1, passlib==1.7.4)
        log.exception("init_db_failed")
        db.rollback()
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
