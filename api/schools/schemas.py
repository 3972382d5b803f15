"""
School API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MIN_LATITUDE, MAX_LATITUDE = -90.0, 90.0
MIN_LONGITUDE, MAX_LONGITUDE = -180.0, 180.0


class AddSchoolRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=255)
    latitude: float = Field(..., ge=MIN_LATITUDE, le=MAX_LATITUDE, allow_inf_nan=False, strict=True)
    longitude: float = Field(..., ge=MIN_LONGITUDE, le=MAX_LONGITUDE, allow_inf_nan=False, strict=True)
