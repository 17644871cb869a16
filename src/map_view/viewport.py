from pydantic import BaseModel, ConfigDict, Field

from map_view.projection import resolution_at_zoom, to_geographic, to_projected


class Viewport(BaseModel):
    """
    Visible part of the map: center coordinate, zoom level and the size of the
    map element in pixels. Pixel (0, 0) is the top left corner.
    """

    model_config = ConfigDict(frozen=True)

    center_lat: float
    center_lon: float
    zoom: float = Field(ge=0, le=24)
    width: int = Field(gt=0)
    height: int = Field(gt=0)

    @property
    def resolution(self) -> float:
        return resolution_at_zoom(self.zoom)

    @property
    def projected_center(self) -> tuple[float, float]:
        return to_projected(self.center_lon, self.center_lat)

    def pixel_to_projected(self, x: float, y: float) -> tuple[float, float]:
        center_x, center_y = self.projected_center
        return (
            center_x + (x - self.width / 2) * self.resolution,
            center_y - (y - self.height / 2) * self.resolution,
        )

    def pixel_to_coordinate(self, x: float, y: float) -> tuple[float, float]:
        """
        Returns (lat, lon) under the given pixel.
        """
        lon, lat = to_geographic(*self.pixel_to_projected(x, y))
        return (lat, lon)

    def coordinate_to_pixel(self, lat: float, lon: float) -> tuple[float, float]:
        center_x, center_y = self.projected_center
        x, y = to_projected(lon, lat)
        return (
            self.width / 2 + (x - center_x) / self.resolution,
            self.height / 2 - (y - center_y) / self.resolution,
        )
