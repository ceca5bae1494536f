from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any


class PlacementIn(BaseModel):
    # body and longitude stay loose; the engine drops what it cannot use
    body: Any = None
    eclipticLongitude: Any = None
    retrograde: Optional[bool] = None

    model_config = ConfigDict(extra="allow")


class AnalyzeOptions(BaseModel):
    derive_descendant: bool = False
    max_aspects: Optional[int] = Field(default=None, ge=0)


class AnalyzeRequest(BaseModel):
    placements: Optional[List[PlacementIn]] = None
    options: AnalyzeOptions = AnalyzeOptions()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "placements": [
                    {"body": "Sun", "eclipticLongitude": 125.0, "retrograde": False},
                    {"body": "Moon", "eclipticLongitude": 155.0, "retrograde": False},
                    {"body": "Ascendant", "eclipticLongitude": 5.0, "retrograde": False},
                ],
                "options": {"derive_descendant": False, "max_aspects": 8},
            }
        }
    )


class MetaOut(BaseModel):
    engine_version: str
    house_system: Optional[str] = None
    dropped: int = 0
    warnings: Optional[List[str]] = None


class PlacementOut(BaseModel):
    body: str
    lon: float
    sign: str
    degree: int
    minute: int
    house: Optional[int] = None
    retrograde: bool = False


class HouseCuspOut(BaseModel):
    house: int
    sign: str
    eclipticLongitude: float
    occupants: List[str] = []


class AspectOut(BaseModel):
    bodyA: str
    bodyB: str
    type: str
    symbol: str
    angleRaw: float
    orb: float
    nature: str
    meaning: str


class DignityOut(BaseModel):
    planet: str
    sign: str
    kind: str
    meaning: str


class PatternOut(BaseModel):
    type: str
    name: str
    participants: List[str]
    focal: Optional[str] = None
    sign: Optional[str] = None
    element: Optional[str] = None
    description: str
    meaning: str


class TallyOut(BaseModel):
    name: str
    count: int
    symbol: str
    bodies: List[str] = []


class ChartRulerOut(BaseModel):
    body: str
    sign: Optional[str] = None
    house: Optional[int] = None


class InsightOut(BaseModel):
    category: str
    insight: str


class AnalyzeResponse(BaseModel):
    meta: MetaOut
    placements: List[PlacementOut]
    houses: Optional[List[HouseCuspOut]] = None
    aspects: List[AspectOut]
    dignities: List[DignityOut]
    patterns: List[PatternOut]
    elementCounts: List[TallyOut]
    modalityCounts: List[TallyOut]
    mostAspectedBody: Optional[str] = None
    chartRuler: Optional[ChartRulerOut] = None
    summary: Dict[str, Optional[str]]
    insights: List[InsightOut]


class InterpretResponse(BaseModel):
    meta: Dict[str, Any]
    planets: Dict[str, str]
    insights: List[InsightOut]
