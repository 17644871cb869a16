from enum import StrEnum


class FeatureCategory(StrEnum):
    BUILDING = "building"
    AMENITY = "amenity"
    OFFICE = "office"
    DEFAULT = "default"

    @property
    def color(self) -> str:
        return _COLOR_BY_CATEGORY[self]


_COLOR_BY_CATEGORY = {
    FeatureCategory.BUILDING: "3B82F6",
    FeatureCategory.AMENITY: "10B981",
    FeatureCategory.OFFICE: "F59E0B",
    FeatureCategory.DEFAULT: "6B7280",
}
