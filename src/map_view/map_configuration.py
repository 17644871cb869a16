import logging
import os
from pathlib import Path
from typing import ClassVar, Self

from pydantic import BaseModel, ValidationError

from map_view.viewport import Viewport

logger = logging.getLogger(__name__)


class MapConfiguration(BaseModel):
    CONFIGURATION_PATH: ClassVar[Path] = Path(
        os.environ.get("MAP_CONFIGURATION_PATH", "./config/map.json")
    )

    geo_document_source: str = "./static/campus.osm"
    tile_url_template: str = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"
    center_lat: float = 0.0
    center_lon: float = 0.0
    default_zoom: float = 16.0
    selection_zoom: float = 18.0
    animation_duration_ms: int = 1000
    hit_tolerance_px: float = 8.0
    viewport_width: int = 1024
    viewport_height: int = 768
    default_faculty_category: str = "Diğer"

    @classmethod
    def from_path(cls, path: Path) -> Self:
        try:
            return cls.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as exc:
            logger.exception(f"Invalid configuration file: {path}", exc_info=exc)
            raise

    @classmethod
    def load(cls) -> Self:
        if not cls.CONFIGURATION_PATH.is_file():
            logger.warning(
                "Map configuration %s not found, using defaults",
                cls.CONFIGURATION_PATH,
            )
            return cls()

        return cls.from_path(cls.CONFIGURATION_PATH)

    def initial_viewport(self) -> Viewport:
        return Viewport(
            center_lat=self.center_lat,
            center_lon=self.center_lon,
            zoom=self.default_zoom,
            width=self.viewport_width,
            height=self.viewport_height,
        )
