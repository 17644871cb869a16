class GeoDocumentFetchError(RuntimeError):
    """
    Geographic document could not be read from its source.
    """

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(source, reason)

        self.source = source
        self.reason = reason

    def __str__(self) -> str:
        return f"Unable to fetch geo document from {self.source}: {self.reason}"
