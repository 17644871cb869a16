from pydantic import BaseModel, ConfigDict


class ViewAnimation(BaseModel):
    model_config = ConfigDict(frozen=True)

    center_lat: float
    center_lon: float
    zoom: float
    duration_ms: int
