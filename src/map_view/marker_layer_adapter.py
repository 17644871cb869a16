from typing import ClassVar

from map_view.renderer import MapRenderer
from marker_index import Marker, MarkerDiff, MarkerIndex, MarkerKind, diff_markers


class MarkerLayerAdapter:
    """
    Applies marker index changes to a MapRenderer. Only the difference between
    the previously rendered markers and the new index reaches the renderer.
    """

    BASE_LAYER: ClassVar[str] = "base"
    # Bottom to top
    LAYER_BY_KIND: ClassVar[dict[MarkerKind, str]] = {
        MarkerKind.OSM_NODE: "campus_features",
        MarkerKind.COURSE: "course_rooms",
        MarkerKind.FACULTY: "faculty",
    }
    SELECTABLE_LAYERS: ClassVar[frozenset[str]] = frozenset(
        {LAYER_BY_KIND[MarkerKind.COURSE], LAYER_BY_KIND[MarkerKind.FACULTY]}
    )

    def __init__(self, renderer: MapRenderer, tile_url_template: str) -> None:
        self._renderer = renderer
        self._rendered: dict[str, Marker] = {}

        self._renderer.add_layer(self.BASE_LAYER, tile_url_template=tile_url_template)
        for layer in self.LAYER_BY_KIND.values():
            self._renderer.add_layer(layer)

    @property
    def rendered(self) -> dict[str, Marker]:
        return dict(self._rendered)

    def sync(self, marker_index: MarkerIndex) -> MarkerDiff:
        diff = diff_markers(self._rendered, marker_index.as_mapping())

        for marker in diff.removed:
            self._renderer.remove_feature(self.LAYER_BY_KIND[marker.kind], marker.id)

        for marker in [*diff.added, *diff.updated]:
            self._renderer.add_feature(self.LAYER_BY_KIND[marker.kind], marker)

        self._rendered = dict(marker_index.as_mapping())
        return diff
