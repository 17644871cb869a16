from pydantic import BaseModel, ConfigDict

from geo_document.tag_key import TagKey


class GeoNode(BaseModel):
    """
    Tagged point parsed from an OpenStreetMap XML document.
    Attributes:
        id (str): Identifier of the node, unique within one document load.
        lat (float): Geographic latitude in WGS84 degrees.
        lon (float): Geographic longitude in WGS84 degrees.
        tags (dict[str, str]): Raw key/value tags of the node.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    lat: float = 0.0
    lon: float = 0.0
    tags: dict[str, str] = {}

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.lat, self.lon)

    def tag(self, key: TagKey) -> str | None:
        if key == TagKey.OTHER:
            return None

        return self.tags.get(key.value)

    @property
    def other_tags(self) -> dict[str, str]:
        return {
            key: value
            for key, value in self.tags.items()
            if TagKey.get_by_value_safe(key) == TagKey.OTHER
        }
