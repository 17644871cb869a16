class LayerNotFoundError(KeyError):
    def __init__(self, layer: str) -> None:
        super().__init__(layer)

        self.layer = layer

    def __str__(self) -> str:
        return f"Layer {self.layer} was not added to the map."


class UnselectableKindError(ValueError):
    """
    Selection was requested for a marker kind that cannot be selected.
    """

    def __init__(self, kind: str) -> None:
        super().__init__(kind)

        self.kind = kind

    def __str__(self) -> str:
        return f"Entities of kind {self.kind} cannot be selected."
