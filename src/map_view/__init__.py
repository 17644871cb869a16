from .exceptions import LayerNotFoundError, UnselectableKindError
from .map_configuration import MapConfiguration
from .map_service import MapService
from .map_state import MapState
from .marker_layer_adapter import MarkerLayerAdapter
from .renderer import MapRenderer, SceneRenderer
from .selection import NoSelection, Selected, SelectedItem, SelectionState
from .selection_controller import SelectionController, SelectionResult
from .view_animation import ViewAnimation
from .viewport import Viewport

__all__ = [
    "MapConfiguration",
    "MapService",
    "MapState",
    "MapRenderer",
    "SceneRenderer",
    "MarkerLayerAdapter",
    "SelectionController",
    "SelectionResult",
    "SelectedItem",
    "Selected",
    "NoSelection",
    "SelectionState",
    "ViewAnimation",
    "Viewport",
    "LayerNotFoundError",
    "UnselectableKindError",
]
