import logging
import os
from typing import Any, ClassVar, Self

import requests

from campus_records.exceptions import RemoteStoreError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


class RemoteStoreClient:
    """
    Thin client of the PostgREST interface exposed by the remote data store.

    Tables are addressed as `/rest/v1/<table>` and functions as
    `/rest/v1/rpc/<function>`. Every failure, either on the transport level or
    signalled by an error status, is raised as RemoteStoreError.
    """

    DEFAULT_URL: ClassVar[str] = os.environ.get(
        "REMOTE_STORE_URL", "http://127.0.0.1:54321"
    )
    DEFAULT_KEY: ClassVar[str] = os.environ.get("REMOTE_STORE_KEY", "")
    DEFAULT_TIMEOUT: ClassVar[float] = float(
        os.environ.get("REMOTE_STORE_TIMEOUT", "10")
    )

    def __init__(
        self,
        base_url: str = DEFAULT_URL,
        api_key: str = DEFAULT_KEY,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {"apikey": api_key, "Authorization": f"Bearer {api_key}"}
        )

    @classmethod
    def from_environment(cls) -> Self:
        return cls(
            os.environ.get("REMOTE_STORE_URL", cls.DEFAULT_URL),
            os.environ.get("REMOTE_STORE_KEY", cls.DEFAULT_KEY),
        )

    def _url(self, path: str) -> str:
        return f"{self._base_url}/rest/v1/{path}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        try:
            response = self._session.request(
                method,
                self._url(path),
                params=params,
                json=json,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise RemoteStoreError(str(exc)) from exc

        if response.status_code >= 400:
            raise RemoteStoreError(
                self._get_error_message(response), response.status_code
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise RemoteStoreError(
                f"Invalid JSON response: {exc}", response.status_code
            ) from exc

    @staticmethod
    def _get_error_message(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text or response.reason

        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])

        return response.text

    @staticmethod
    def _as_rows(payload: Any) -> list[Row]:
        if payload is None:
            return []

        if isinstance(payload, dict):
            return [payload]

        return list(payload)

    def select(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        order: list[tuple[str, bool]] | None = None,
        columns: str = "*",
    ) -> list[Row]:
        """
        Returns rows of the table matching all equality filters, ordered by the
        given (column, ascending) pairs.
        """
        params = {"select": columns}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{value}"

        if order:
            params["order"] = ",".join(
                f"{column}.{'asc' if ascending else 'desc'}"
                for column, ascending in order
            )

        return self._as_rows(self._request("GET", table, params=params))

    def call(self, function: str, arguments: dict[str, Any] | None = None) -> list[Row]:
        return self._as_rows(
            self._request("POST", f"rpc/{function}", json=arguments or {})
        )

    def insert(self, table: str, row: Row) -> Row:
        rows = self._as_rows(
            self._request(
                "POST",
                table,
                json=row,
                headers={"Prefer": "return=representation"},
            )
        )
        if not rows:
            raise RemoteStoreError(f"Insert into {table} returned no rows")

        return rows[0]

    def update(self, table: str, row_id: str, values: Row) -> Row | None:
        rows = self._as_rows(
            self._request(
                "PATCH",
                table,
                params={"id": f"eq.{row_id}"},
                json=values,
                headers={"Prefer": "return=representation"},
            )
        )

        return rows[0] if rows else None

    def delete(self, table: str, row_id: str) -> bool:
        rows = self._as_rows(
            self._request(
                "DELETE",
                table,
                params={"id": f"eq.{row_id}"},
                headers={"Prefer": "return=representation"},
            )
        )

        return bool(rows)
