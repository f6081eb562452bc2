from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class StressStatus(str, Enum):
    RELAXED = "Relaxed"
    NORMAL = "Normal"
    STRESS = "Stress"


class HRVMetrics(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mean_rr: float = Field(alias="meanRR")
    sdnn: float
    min_rr: float = Field(alias="minRR")
    max_rr: float = Field(alias="maxRR")


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_name: str = Field(alias="fileName")
    heart_rates: Optional[List[float]] = Field(alias="heartRates")
    rr_intervals: List[float] = Field(alias="rrIntervals")
    hrv: float
    status: StressStatus
    timestamp: datetime
    data_point_count: int = Field(alias="dataPoints")
    metrics: Optional[HRVMetrics] = None


class ErrorResponse(BaseModel):
    error: str
    message: str


class HealthResponse(BaseModel):
    status: str
    message: str
