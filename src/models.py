# src/models.py
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class RiskTier(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "VeryHigh"
    EXTREME = "Extreme"


class ProtectiveMeasure(str, Enum):
    # A ordem aqui é a ordem de exibição
    SUNGLASSES = "sunglasses"
    SUNSCREEN = "sunscreen"
    HAT = "hat"
    PROTECTIVE_CLOTHING = "protective-clothing"
    SHADE = "shade"
    REDUCED_EXPOSURE_TIME = "reduced-exposure-time"
    AVOID_SUN = "avoid-sun"


class SkinType(str, Enum):
    TYPE1 = "type1"
    TYPE2 = "type2"
    TYPE3 = "type3"
    TYPE4 = "type4"
    TYPE5 = "type5"
    TYPE6 = "type6"


class RiskResult(BaseModel):
    tier: RiskTier
    label: str
    color: str
    advisory_text: str
    measures: List[ProtectiveMeasure]
    uv_index: int
    raw_uv_index: float


class SensitivityResult(BaseModel):
    total_score: int
    skin_type: SkinType
    label: str
    color: str
    reapply_advice: str


class InvalidInputError(BaseModel):
    """UV index that cannot be classified (NaN, negative, non-numeric)."""

    error: str = "InvalidInput"
    message: str
    value: Optional[str] = None


class IncompleteAnswersError(BaseModel):
    """Scoring requested before all ten questions were answered."""

    error: str = "IncompleteAnswers"
    message: str
    missing: List[int] = []


class InvalidAnswerError(BaseModel):
    """An answer outside 0..4, or an answers vector of the wrong shape."""

    error: str = "InvalidAnswer"
    message: str
    question: Optional[int] = None
    value: Optional[str] = None


ScoringError = (IncompleteAnswersError, InvalidAnswerError)


class Location(BaseModel):
    lat: float
    lon: float
    name: str
    country: Optional[str] = None


class CurrentWeather(BaseModel):
    temperature_celsius: int
    description: str
    icon: Optional[str] = None
    timezone_offset_seconds: int = 0


class WeatherReport(BaseModel):
    location: Location
    weather: CurrentWeather
    uv_index_raw: float
    uv_index: int
    local_time: datetime
