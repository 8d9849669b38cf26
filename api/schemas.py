from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON은 camelCase, 파이썬 필드는 snake_case"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RegionOut(CamelModel):
    id: str
    name: str
    country: str
    continent: str


class BeachOut(CamelModel):
    id: str
    name: str
    region_id: str
    region: Optional[RegionOut] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    description: Optional[str] = None
    wave_type: Optional[str] = None
    difficulty: Optional[str] = None
    crime_level: Optional[str] = None
    has_shark_attack: bool = False
    last_shark_attack: Optional[date] = None
    is_hidden_gem: bool = False
    optimal_wind_directions: Optional[str] = None
    optimal_swell_directions: Optional[str] = None
    swell_size_min: Optional[float] = None
    swell_size_max: Optional[float] = None
    ideal_swell_period_min: Optional[float] = None


class ForecastOut(CamelModel):
    id: str
    date: date
    region_id: str
    wind_speed: float
    wind_direction: float
    swell_height: float
    swell_period: float
    swell_direction: float
    swell_cardinal_direction: Optional[str] = None
