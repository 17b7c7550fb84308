"""DTOs for FastAPI endpoints."""
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator

FiniteValue = Annotated[float, Field(allow_inf_nan=False)]


class ZoomWindow(BaseModel):
    zoom_start: Optional[float] = Field(None, ge=0.0, le=100.0)
    zoom_end: Optional[float] = Field(None, ge=0.0, le=100.0)

    @model_validator(mode="after")
    def _ordered(self) -> "ZoomWindow":
        start = 0.0 if self.zoom_start is None else self.zoom_start
        end = 100.0 if self.zoom_end is None else self.zoom_end
        if start > end:
            raise ValueError("zoom_start must not exceed zoom_end")
        return self


class WindowRequest(ZoomWindow):
    series: List[Tuple[int, FiniteValue]] = Field(default_factory=list)


class TrendRequest(ZoomWindow):
    history: Optional[List[Dict[str, Any]]] = None


class HiscoresRequest(BaseModel):
    mode: str = "4k"
    scores: List[Dict[str, Any]] = Field(default_factory=list)
    update: Optional[Dict[str, Any]] = None


class ResolveRequest(HiscoresRequest):
    origin_index: int
    maps: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class ChangesRequest(BaseModel):
    mode: str = "4k"
    last_update: Optional[Dict[str, Any]] = None
    update: Optional[Dict[str, Any]] = None
    error_status: Optional[int] = None
