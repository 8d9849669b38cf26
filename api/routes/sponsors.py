from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.schemas import CamelModel
from core.database import get_db
from models.sponsor import Sponsor

router = APIRouter(
    prefix="/v1/sponsors",
    tags=["sponsors"]
)


class SponsorOut(CamelModel):
    id: str
    name: str
    logo: str
    link: str


@router.get("", response_model=List[SponsorOut])
async def list_sponsors(db: Session = Depends(get_db)):
    """예보 위젯 스폰서 목록"""
    return db.query(Sponsor).filter(Sponsor.active.is_(True)).order_by(Sponsor.name).all()
