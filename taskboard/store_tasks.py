# -*- coding: utf-8 -*-

"""
Task Management - Remote Store.

Async HTTP client for the task service: list, create, update and delete
tasks identified by opaque IDs.
"""

from typing import Any, List, Optional, Union
from urllib.parse import quote

import httpx
from loguru import logger

from taskboard.config import API_TOKEN, API_URL, REQUEST_TIMEOUT
from taskboard.errors import StoreError
from taskboard.models_tasks import Task, TaskPayload, TaskStatusUpdate


def extract_error_detail(response: httpx.Response) -> Optional[str]:
    """
    Pull a human-readable message out of an error response body.

    Prefers `message`, then an `errors` list joined with ", ",
    then a plain string body.
    """
    try:
        data = response.json()
    except ValueError:
        text = response.text.strip()
        return text or None

    if isinstance(data, dict):
        if data.get("message"):
            return str(data["message"])
        errors = data.get("errors")
        if isinstance(errors, list) and errors:
            return ", ".join(str(e) for e in errors)
        return None
    if isinstance(data, str) and data:
        return data
    return None


def _task_path(task_id: str) -> str:
    # Ids are opaque; escape every reserved character
    return f"/tasks/{quote(task_id, safe='')}"


class RemoteTaskStore:
    """Task store backed by the remote REST API."""

    def __init__(
        self,
        base_url: str = API_URL,
        token: str = API_TOKEN,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "RemoteTaskStore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, json: Any = None) -> Any:
        logger.debug(f"{method} {url}")
        try:
            response = await self._client.request(method, url, json=json)
        except httpx.HTTPError as e:
            raise StoreError(f"{method} {url} failed: {e}") from e

        if response.is_error:
            detail = extract_error_detail(response)
            raise StoreError(
                f"{method} {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
                detail=detail,
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise StoreError(f"{method} {url} returned invalid JSON", status_code=response.status_code) from e

    @staticmethod
    def _parse_task(data: Any) -> Task:
        # The service wraps single tasks as {"task": {...}}
        if isinstance(data, dict) and isinstance(data.get("task"), dict):
            data = data["task"]
        try:
            return Task.model_validate(data)
        except ValueError as e:
            raise StoreError(f"Malformed task in response: {e}") from e

    async def list(self) -> List[Task]:
        """Fetch all tasks, in the order the service returns them."""
        data = await self._request("GET", "/tasks")
        items = data.get("tasks", []) if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise StoreError("Malformed task list in response")
        try:
            return [Task.model_validate(item) for item in items]
        except ValueError as e:
            raise StoreError(f"Malformed task in response: {e}") from e

    async def create(self, payload: TaskPayload) -> Task:
        """Create a new task."""
        data = await self._request("POST", "/tasks", json=payload.to_wire())
        return self._parse_task(data)

    async def update(self, task_id: str, data: Union[TaskPayload, TaskStatusUpdate]) -> Task:
        """Update a task with a full payload or partial fields (PUT)."""
        body = data.to_wire() if isinstance(data, TaskPayload) else data.model_dump(mode="json")
        result = await self._request("PUT", _task_path(task_id), json=body)
        return self._parse_task(result)

    async def delete(self, task_id: str) -> None:
        """Delete a task."""
        await self._request("DELETE", _task_path(task_id))
