from .exceptions import GeoDocumentFetchError
from .feature_category import FeatureCategory
from .feature_classifier import ClassifiedFeature, classify_geo_node
from .geo_document_parser import GeoDocumentLoader, GeoDocumentParser
from .geo_node import GeoNode
from .tag_key import TagKey

__all__ = [
    "GeoNode",
    "TagKey",
    "FeatureCategory",
    "ClassifiedFeature",
    "classify_geo_node",
    "GeoDocumentParser",
    "GeoDocumentLoader",
    "GeoDocumentFetchError",
]
