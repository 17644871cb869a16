from pydantic import BaseModel, ConfigDict

from geo_document.feature_category import FeatureCategory
from geo_document.geo_node import GeoNode
from geo_document.tag_key import TagKey

# Order matters, the first tag present decides the category.
_CATEGORY_PRECEDENCE = [
    (TagKey.BUILDING, FeatureCategory.BUILDING),
    (TagKey.AMENITY, FeatureCategory.AMENITY),
    (TagKey.OFFICE, FeatureCategory.OFFICE),
]


class ClassifiedFeature(BaseModel):
    model_config = ConfigDict(frozen=True)

    node: GeoNode
    category: FeatureCategory

    @property
    def color(self) -> str:
        return self.category.color

    @property
    def label(self) -> str:
        return self.node.tag(TagKey.NAME) or self.category.value


def classify_geo_node(node: GeoNode) -> ClassifiedFeature | None:
    """
    Decides whether the node is shown on the map and with which category.
    Returns None for nodes without any recognized tag and without a name.
    """
    for tag_key, category in _CATEGORY_PRECEDENCE:
        if node.tag(tag_key) is not None:
            return ClassifiedFeature(node=node, category=category)

    if node.tag(TagKey.NAME) is not None:
        return ClassifiedFeature(node=node, category=FeatureCategory.DEFAULT)

    return None
