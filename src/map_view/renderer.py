import logging
from abc import ABC, abstractmethod
from typing import Collection

from shapely import STRtree, points
from shapely.geometry import Point

from map_view.exceptions import LayerNotFoundError
from map_view.projection import to_projected, to_projected_many
from map_view.view_animation import ViewAnimation
from map_view.viewport import Viewport
from marker_index import Marker

logger = logging.getLogger(__name__)


class MapRenderer(ABC):
    """
    Imperative interface of the map rendering layer. Layers are stacked in the
    order they were added, the last added layer is drawn on top.
    """

    @abstractmethod
    def add_layer(self, name: str, *, tile_url_template: str | None = None) -> None: ...

    @abstractmethod
    def add_feature(self, layer: str, marker: Marker) -> None: ...

    @abstractmethod
    def remove_feature(self, layer: str, marker_id: str) -> None: ...

    @abstractmethod
    def hit_test(
        self, x: float, y: float, layers: Collection[str] | None = None
    ) -> str | None:
        """
        Returns the id of the topmost feature under the pixel, if any.
        """

    @abstractmethod
    def animate_view(self, animation: ViewAnimation) -> None: ...


class SceneRenderer(MapRenderer):
    """
    In-process scene used for hit-testing clicks and tracking the camera.

    Features are kept per layer and projected to Web Mercator metres. Each
    layer lazily builds an STRtree of its features which is dropped whenever
    the layer changes. A click hits a feature when the feature lies within
    `hit_tolerance_px` pixels of the clicked point at the current zoom.
    """

    def __init__(self, viewport: Viewport, hit_tolerance_px: float = 8.0) -> None:
        self.viewport = viewport
        self.hit_tolerance_px = hit_tolerance_px
        self.tile_url_templates: dict[str, str] = {}
        self.animations: list[ViewAnimation] = []

        self._layers: dict[str, dict[str, Marker]] = {}
        self._trees: dict[str, tuple[STRtree, list[Marker]]] = {}

    @property
    def layers(self) -> list[str]:
        return list(self._layers)

    def features(self, layer: str) -> list[Marker]:
        return list(self._get_layer(layer).values())

    def _get_layer(self, layer: str) -> dict[str, Marker]:
        try:
            return self._layers[layer]
        except KeyError:
            raise LayerNotFoundError(layer)

    def add_layer(self, name: str, *, tile_url_template: str | None = None) -> None:
        self._layers.setdefault(name, {})
        if tile_url_template is not None:
            self.tile_url_templates[name] = tile_url_template

    def add_feature(self, layer: str, marker: Marker) -> None:
        self._get_layer(layer)[marker.id] = marker
        self._trees.pop(layer, None)

    def remove_feature(self, layer: str, marker_id: str) -> None:
        self._get_layer(layer).pop(marker_id, None)
        self._trees.pop(layer, None)

    def set_viewport(self, viewport: Viewport) -> None:
        self.viewport = viewport

    def _get_tree(self, layer: str) -> tuple[STRtree, list[Marker]] | None:
        if layer in self._trees:
            return self._trees[layer]

        markers = list(self._layers[layer].values())
        if not markers:
            return None

        xs, ys = to_projected_many(
            [marker.lon for marker in markers], [marker.lat for marker in markers]
        )
        self._trees[layer] = (STRtree(points(xs, ys)), markers)
        return self._trees[layer]

    def hit_test(
        self, x: float, y: float, layers: Collection[str] | None = None
    ) -> str | None:
        clicked_point = Point(self.viewport.pixel_to_projected(x, y))
        search_area = clicked_point.buffer(
            self.hit_tolerance_px * self.viewport.resolution
        )

        for layer in reversed(self._layers):
            if layers is not None and layer not in layers:
                continue

            if (tree_and_markers := self._get_tree(layer)) is None:
                continue

            tree, markers = tree_and_markers
            hits = tree.query(search_area, predicate="intersects")
            if len(hits) == 0:
                continue

            nearest = min(
                hits,
                key=lambda index: clicked_point.distance(
                    Point(to_projected(markers[index].lon, markers[index].lat))
                ),
            )
            return markers[nearest].id

        return None

    def animate_view(self, animation: ViewAnimation) -> None:
        logger.debug(
            "Animating view to %s, %s at zoom %s",
            animation.center_lat,
            animation.center_lon,
            animation.zoom,
        )
        self.animations.append(animation)
        self.viewport = self.viewport.model_copy(
            update={
                "center_lat": animation.center_lat,
                "center_lon": animation.center_lon,
                "zoom": animation.zoom,
            }
        )
