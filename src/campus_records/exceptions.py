class RemoteStoreError(RuntimeError):
    """
    Remote store request failed or returned an error response.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message, status_code)

        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return f"Remote store request failed: {self.message}"

        return f"Remote store request failed ({self.status_code}): {self.message}"


class EntityNotFoundError(ValueError):
    """
    Record with provided ID does not exist.
    """

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(kind, entity_id)

        self.kind = kind
        self.entity_id = entity_id

    def __str__(self) -> str:
        return f"{self.kind.capitalize()} {self.entity_id} not found."
