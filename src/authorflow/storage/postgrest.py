"""PostgREST-backed project store (Supabase ``/rest/v1``)."""

import logging
from datetime import UTC, datetime
from typing import Any

import httpx
from pydantic_core import to_jsonable_python

from authorflow.errors.exceptions import StoreError
from authorflow.models.project import Project

logger = logging.getLogger(__name__)

# Postgres "invalid text representation", e.g. a non-uuid value in an id filter
INVALID_TEXT_REPRESENTATION = "22P02"


def parse_content_range_total(header: str | None) -> int:
    """Extract the total from a ``Content-Range`` header such as ``0-2/3`` or ``*/0``."""
    if not header or "/" not in header:
        raise StoreError("Missing row count in store response")
    total = header.rsplit("/", 1)[1]
    if not total.isdigit():
        raise StoreError(f"Unexpected Content-Range header: {header}")
    return int(total)


class MalformedKeyError(StoreError):
    """A filter value could not be cast to its column type."""

    message = "Malformed key in store query"


def _error_code(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    return body.get("code") if isinstance(body, dict) else None


class PostgrestProjectStore:
    """Project store that talks to a PostgREST endpoint over HTTP.

    Every query carries the owner filter ``user_id=eq.<id>``.
    """

    TABLE = "projects"

    def __init__(self, client: httpx.AsyncClient, base_url: str, api_key: str):
        self._client = client
        self._url = f"{base_url.rstrip('/')}/rest/v1/{self.TABLE}"
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
        }

    async def _request(
        self,
        method: str,
        params: dict[str, str],
        json: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        headers = dict(self._headers)
        if prefer:
            headers["Prefer"] = prefer
        try:
            response = await self._client.request(
                method, self._url, params=params, json=json, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error("Store request %s %s failed: %s", method, self.TABLE, e)
            raise StoreError(details={"reason": str(e)}) from e

        if response.status_code >= 400:
            if response.status_code == 400 and _error_code(response) == INVALID_TEXT_REPRESENTATION:
                logger.info("Store rejected a malformed key for %s %s", method, self.TABLE)
                raise MalformedKeyError(details={"status": response.status_code})
            logger.error(
                "Store returned %s for %s %s: %s",
                response.status_code,
                method,
                self.TABLE,
                response.text,
            )
            raise StoreError(details={"status": response.status_code})
        return response

    @staticmethod
    def _owner_filter(user_id: str, project_id: str | None = None) -> dict[str, str]:
        params = {"user_id": f"eq.{user_id}"}
        if project_id is not None:
            params["id"] = f"eq.{project_id}"
        return params

    @staticmethod
    def _rows(response: httpx.Response) -> list[Project]:
        return [Project.model_validate(row) for row in response.json()]

    async def list_for_owner(self, user_id: str) -> list[Project]:
        params = {"select": "*", "order": "updated_at.desc", **self._owner_filter(user_id)}
        response = await self._request("GET", params)
        return self._rows(response)

    async def get_for_owner(self, project_id: str, user_id: str) -> Project | None:
        params = {"select": "*", "limit": "1", **self._owner_filter(user_id, project_id)}
        try:
            response = await self._request("GET", params)
        except MalformedKeyError:
            return None
        rows = self._rows(response)
        return rows[0] if rows else None

    async def count_for_owner(self, user_id: str) -> int:
        params = {"select": "id", **self._owner_filter(user_id)}
        response = await self._request("HEAD", params, prefer="count=exact")
        return parse_content_range_total(response.headers.get("content-range"))

    async def insert(self, fields: dict[str, Any]) -> Project:
        response = await self._request(
            "POST",
            {"select": "*"},
            json=[to_jsonable_python(fields)],
            prefer="return=representation",
        )
        rows = self._rows(response)
        if not rows:
            raise StoreError("Store did not return the inserted project")
        return rows[0]

    async def update_for_owner(
        self, project_id: str, user_id: str, changes: dict[str, Any]
    ) -> Project | None:
        payload = {**changes, "updated_at": datetime.now(UTC)}
        try:
            response = await self._request(
                "PATCH",
                {"select": "*", **self._owner_filter(user_id, project_id)},
                json=to_jsonable_python(payload),
                prefer="return=representation",
            )
        except MalformedKeyError:
            return None
        rows = self._rows(response)
        return rows[0] if rows else None

    async def delete_for_owner(self, project_id: str, user_id: str) -> bool:
        try:
            response = await self._request(
                "DELETE",
                {"select": "id", **self._owner_filter(user_id, project_id)},
                prefer="return=representation",
            )
        except MalformedKeyError:
            return False
        return bool(response.json())
