"""Toggl Track API client."""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timezone
from typing import Any

import aiohttp

from ._retry import RetryPipeline, Sleep
from ._serialization import drop_none
from ._transport import RequestDescriptor, Transport
from ._validation import validate
from .config import ClientConfig
from .const import (
    CLIENT_ARCHIVE_ENDPOINT,
    CLIENT_ENDPOINT,
    CLIENT_RESTORE_ENDPOINT,
    CLIENTS_ENDPOINT,
    GROUP_ENDPOINT,
    GROUPS_ENDPOINT,
    ME_CURRENT_TIME_ENTRY_ENDPOINT,
    ME_ENDPOINT,
    ME_PREFERENCES_ENDPOINT,
    ME_QUOTA_ENDPOINT,
    ME_TIME_ENTRIES_ENDPOINT,
    ME_TIME_ENTRY_ENDPOINT,
    ORGANIZATION_ENDPOINT,
    ORGANIZATION_USERS_ENDPOINT,
    PROJECT_ENDPOINT,
    PROJECTS_ENDPOINT,
    TAG_ENDPOINT,
    TAGS_ENDPOINT,
    TASK_ENDPOINT,
    TASKS_ENDPOINT,
    TIME_ENTRIES_ENDPOINT,
    TIME_ENTRY_ENDPOINT,
    TIME_ENTRY_STOP_ENDPOINT,
    WORKSPACE_ENDPOINT,
    WORKSPACE_USERS_ENDPOINT,
    WORKSPACES_ENDPOINT,
)
from .models import (
    Client,
    Group,
    Organization,
    OrganizationQuota,
    OrganizationUser,
    Project,
    Tag,
    Task,
    TimeEntry,
    TimeEntryCreate,
    User,
    UserPreferences,
    Workspace,
    WorkspaceUser,
)


class TogglApiClient:
    """Async client for the Toggl Track v9 API.

    Usage::

        config = ClientConfig.from_env()
        async with TogglApiClient(config) as client:
            me = await client.async_get_me()
            entries = await client.async_get_time_entries()

    If no session is provided, the client creates and manages its own.
    Every call goes through the same pipeline: one HTTP attempt, up to three
    retries when rate limited, translation of failures into ``ApiError``,
    then validation of the body against the resource model.
    """

    def __init__(
        self,
        config: ClientConfig,
        session: aiohttp.ClientSession | None = None,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config
        self._owns_session = session is None
        self._session = session or aiohttp.ClientSession()
        self._pipeline = RetryPipeline(Transport(self._session, config), sleep=sleep)

    async def __aenter__(self) -> TogglApiClient:
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.async_close()

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def async_close(self) -> None:
        """Close the HTTP session if the client owns it."""
        if self._owns_session:
            await self._session.close()

    # ------------------------------------------------------------------ #
    #  Me
    # ------------------------------------------------------------------ #

    async def async_get_me(self, *, with_related_data: bool = False) -> User:
        """Fetch the authenticated user's profile."""
        params = {"with_related_data": True} if with_related_data else None
        return await self._request(User, "GET", ME_ENDPOINT, params=params)

    async def async_update_me(self, data: dict[str, Any]) -> User:
        return await self._request(User, "PUT", ME_ENDPOINT, json_body=data)

    async def async_get_preferences(self) -> UserPreferences:
        return await self._request(UserPreferences, "GET", ME_PREFERENCES_ENDPOINT)

    async def async_update_preferences(self, data: dict[str, Any]) -> UserPreferences:
        return await self._request(
            UserPreferences, "POST", ME_PREFERENCES_ENDPOINT, json_body=data
        )

    async def async_get_quota(self) -> list[OrganizationQuota]:
        """Fetch the remaining API quota per organization."""
        return await self._request(list[OrganizationQuota], "GET", ME_QUOTA_ENDPOINT)

    # ------------------------------------------------------------------ #
    #  Workspaces
    # ------------------------------------------------------------------ #

    async def async_get_workspaces(self) -> list[Workspace]:
        return await self._request(list[Workspace], "GET", WORKSPACES_ENDPOINT)

    async def async_get_workspace(self, workspace_id: int) -> Workspace:
        url = WORKSPACE_ENDPOINT.format(workspace_id=workspace_id)
        return await self._request(Workspace, "GET", url)

    async def async_update_workspace(
        self, workspace_id: int, data: dict[str, Any]
    ) -> Workspace:
        url = WORKSPACE_ENDPOINT.format(workspace_id=workspace_id)
        return await self._request(Workspace, "PUT", url, json_body=data)

    async def async_get_workspace_users(self, workspace_id: int) -> list[WorkspaceUser]:
        url = WORKSPACE_USERS_ENDPOINT.format(workspace_id=workspace_id)
        return await self._request(list[WorkspaceUser], "GET", url)

    # ------------------------------------------------------------------ #
    #  Time entries
    # ------------------------------------------------------------------ #

    async def async_get_time_entries(
        self,
        *,
        start_date: str | None = None,
        end_date: str | None = None,
        meta: bool = False,
    ) -> list[TimeEntry]:
        """Fetch the authenticated user's time entries.

        Args:
            start_date: ISO 8601 lower bound (inclusive).
            end_date: ISO 8601 upper bound (exclusive).
            meta: Ask the API to include related entity metadata.
        """
        params: dict[str, Any] = {"start_date": start_date, "end_date": end_date}
        if meta:
            params["meta"] = True
        return await self._request(
            list[TimeEntry], "GET", ME_TIME_ENTRIES_ENDPOINT, params=params
        )

    async def async_get_current_time_entry(self) -> TimeEntry | None:
        """Fetch the running time entry, or ``None`` if no timer is running."""
        data = await self._execute("GET", ME_CURRENT_TIME_ENTRY_ENDPOINT)
        if not data:
            return None
        return validate(TimeEntry, data)

    async def async_get_time_entry(self, time_entry_id: int) -> TimeEntry:
        url = ME_TIME_ENTRY_ENDPOINT.format(time_entry_id=time_entry_id)
        return await self._request(TimeEntry, "GET", url)

    async def async_create_time_entry(
        self, workspace_id: int, entry: TimeEntryCreate
    ) -> TimeEntry:
        """Create a time entry in a workspace.

        The workspace in the URL wins over ``entry.workspace_id``.
        """
        url = TIME_ENTRIES_ENDPOINT.format(workspace_id=workspace_id)
        body = entry.to_api_dict()
        body["workspace_id"] = workspace_id
        return await self._request(TimeEntry, "POST", url, json_body=body)

    async def async_start_time_entry(
        self,
        workspace_id: int,
        *,
        description: str | None = None,
        project_id: int | None = None,
        task_id: int | None = None,
        tags: list[str] | None = None,
        tag_ids: list[int] | None = None,
        billable: bool | None = None,
    ) -> TimeEntry:
        """Start a running timer now."""
        entry = TimeEntryCreate(
            workspace_id=workspace_id,
            start=datetime.now(timezone.utc).isoformat(timespec="seconds"),
            # A negative duration marks the entry as running.
            duration=-int(time.time()),
            description=description,
            project_id=project_id,
            task_id=task_id,
            tags=tags,
            tag_ids=tag_ids,
            billable=billable,
        )
        return await self.async_create_time_entry(workspace_id, entry)

    async def async_stop_time_entry(
        self, workspace_id: int, time_entry_id: int
    ) -> TimeEntry:
        url = TIME_ENTRY_STOP_ENDPOINT.format(
            workspace_id=workspace_id, time_entry_id=time_entry_id
        )
        return await self._request(TimeEntry, "PATCH", url)

    async def async_update_time_entry(
        self, workspace_id: int, time_entry_id: int, data: dict[str, Any]
    ) -> TimeEntry:
        """Update an entry. ``data`` is sent as given, so a ``None`` value clears that field."""
        url = TIME_ENTRY_ENDPOINT.format(
            workspace_id=workspace_id, time_entry_id=time_entry_id
        )
        return await self._request(TimeEntry, "PUT", url, json_body=data)

    async def async_delete_time_entry(self, workspace_id: int, time_entry_id: int) -> None:
        url = TIME_ENTRY_ENDPOINT.format(
            workspace_id=workspace_id, time_entry_id=time_entry_id
        )
        await self._execute("DELETE", url)

    # ------------------------------------------------------------------ #
    #  Projects
    # ------------------------------------------------------------------ #

    async def async_get_projects(
        self, workspace_id: int, *, active: bool | None = None
    ) -> list[Project]:
        url = PROJECTS_ENDPOINT.format(workspace_id=workspace_id)
        return await self._request(
            list[Project], "GET", url, params={"active": active}
        )

    async def async_get_project(self, workspace_id: int, project_id: int) -> Project:
        url = PROJECT_ENDPOINT.format(workspace_id=workspace_id, project_id=project_id)
        return await self._request(Project, "GET", url)

    async def async_create_project(
        self, workspace_id: int, data: dict[str, Any]
    ) -> Project:
        url = PROJECTS_ENDPOINT.format(workspace_id=workspace_id)
        body = drop_none({**data, "workspace_id": workspace_id})
        return await self._request(Project, "POST", url, json_body=body)

    async def async_update_project(
        self, workspace_id: int, project_id: int, data: dict[str, Any]
    ) -> Project:
        url = PROJECT_ENDPOINT.format(workspace_id=workspace_id, project_id=project_id)
        return await self._request(Project, "PUT", url, json_body=data)

    async def async_delete_project(self, workspace_id: int, project_id: int) -> None:
        url = PROJECT_ENDPOINT.format(workspace_id=workspace_id, project_id=project_id)
        await self._execute("DELETE", url)

    # ------------------------------------------------------------------ #
    #  Clients
    # ------------------------------------------------------------------ #

    async def async_get_clients(
        self, workspace_id: int, *, status: str | None = None
    ) -> list[Client]:
        """Fetch clients; ``status`` is ``active``, ``archived`` or ``both``."""
        url = CLIENTS_ENDPOINT.format(workspace_id=workspace_id)
        return await self._request(list[Client], "GET", url, params={"status": status})

    async def async_get_client(self, workspace_id: int, client_id: int) -> Client:
        url = CLIENT_ENDPOINT.format(workspace_id=workspace_id, client_id=client_id)
        return await self._request(Client, "GET", url)

    async def async_create_client(self, workspace_id: int, data: dict[str, Any]) -> Client:
        url = CLIENTS_ENDPOINT.format(workspace_id=workspace_id)
        body = drop_none({**data, "wid": workspace_id})
        return await self._request(Client, "POST", url, json_body=body)

    async def async_update_client(
        self, workspace_id: int, client_id: int, data: dict[str, Any]
    ) -> Client:
        url = CLIENT_ENDPOINT.format(workspace_id=workspace_id, client_id=client_id)
        return await self._request(Client, "PUT", url, json_body=data)

    async def async_archive_client(self, workspace_id: int, client_id: int) -> Client:
        url = CLIENT_ARCHIVE_ENDPOINT.format(
            workspace_id=workspace_id, client_id=client_id
        )
        return await self._request(Client, "POST", url)

    async def async_restore_client(self, workspace_id: int, client_id: int) -> Client:
        url = CLIENT_RESTORE_ENDPOINT.format(
            workspace_id=workspace_id, client_id=client_id
        )
        return await self._request(Client, "POST", url)

    async def async_delete_client(self, workspace_id: int, client_id: int) -> None:
        url = CLIENT_ENDPOINT.format(workspace_id=workspace_id, client_id=client_id)
        await self._execute("DELETE", url)

    # ------------------------------------------------------------------ #
    #  Tags
    # ------------------------------------------------------------------ #

    async def async_get_tags(self, workspace_id: int) -> list[Tag]:
        url = TAGS_ENDPOINT.format(workspace_id=workspace_id)
        return await self._request(list[Tag], "GET", url)

    async def async_create_tag(self, workspace_id: int, name: str) -> Tag:
        url = TAGS_ENDPOINT.format(workspace_id=workspace_id)
        body = {"name": name, "workspace_id": workspace_id}
        return await self._request(Tag, "POST", url, json_body=body)

    async def async_update_tag(
        self, workspace_id: int, tag_id: int, data: dict[str, Any]
    ) -> Tag:
        url = TAG_ENDPOINT.format(workspace_id=workspace_id, tag_id=tag_id)
        return await self._request(Tag, "PUT", url, json_body=data)

    async def async_delete_tag(self, workspace_id: int, tag_id: int) -> None:
        url = TAG_ENDPOINT.format(workspace_id=workspace_id, tag_id=tag_id)
        await self._execute("DELETE", url)

    # ------------------------------------------------------------------ #
    #  Tasks
    # ------------------------------------------------------------------ #

    async def async_get_tasks(
        self, workspace_id: int, project_id: int, *, active: bool | None = None
    ) -> list[Task]:
        url = TASKS_ENDPOINT.format(workspace_id=workspace_id, project_id=project_id)
        return await self._request(list[Task], "GET", url, params={"active": active})

    async def async_get_task(
        self, workspace_id: int, project_id: int, task_id: int
    ) -> Task:
        url = TASK_ENDPOINT.format(
            workspace_id=workspace_id, project_id=project_id, task_id=task_id
        )
        return await self._request(Task, "GET", url)

    async def async_create_task(
        self, workspace_id: int, project_id: int, data: dict[str, Any]
    ) -> Task:
        url = TASKS_ENDPOINT.format(workspace_id=workspace_id, project_id=project_id)
        body = drop_none({**data, "workspace_id": workspace_id, "project_id": project_id})
        return await self._request(Task, "POST", url, json_body=body)

    async def async_update_task(
        self, workspace_id: int, project_id: int, task_id: int, data: dict[str, Any]
    ) -> Task:
        url = TASK_ENDPOINT.format(
            workspace_id=workspace_id, project_id=project_id, task_id=task_id
        )
        return await self._request(Task, "PUT", url, json_body=data)

    async def async_delete_task(
        self, workspace_id: int, project_id: int, task_id: int
    ) -> None:
        url = TASK_ENDPOINT.format(
            workspace_id=workspace_id, project_id=project_id, task_id=task_id
        )
        await self._execute("DELETE", url)

    # ------------------------------------------------------------------ #
    #  Organizations and groups
    # ------------------------------------------------------------------ #

    async def async_get_organization(self, organization_id: int) -> Organization:
        url = ORGANIZATION_ENDPOINT.format(organization_id=organization_id)
        return await self._request(Organization, "GET", url)

    async def async_update_organization(
        self, organization_id: int, data: dict[str, Any]
    ) -> Organization:
        url = ORGANIZATION_ENDPOINT.format(organization_id=organization_id)
        return await self._request(Organization, "PUT", url, json_body=data)

    async def async_get_organization_users(
        self, organization_id: int
    ) -> list[OrganizationUser]:
        url = ORGANIZATION_USERS_ENDPOINT.format(organization_id=organization_id)
        return await self._request(list[OrganizationUser], "GET", url)

    async def async_get_groups(self, organization_id: int) -> list[Group]:
        url = GROUPS_ENDPOINT.format(organization_id=organization_id)
        return await self._request(list[Group], "GET", url)

    async def async_create_group(
        self, organization_id: int, data: dict[str, Any]
    ) -> Group:
        url = GROUPS_ENDPOINT.format(organization_id=organization_id)
        return await self._request(Group, "POST", url, json_body=data)

    async def async_update_group(
        self, organization_id: int, group_id: int, data: dict[str, Any]
    ) -> Group:
        url = GROUP_ENDPOINT.format(organization_id=organization_id, group_id=group_id)
        return await self._request(Group, "PUT", url, json_body=data)

    async def async_delete_group(self, organization_id: int, group_id: int) -> None:
        url = GROUP_ENDPOINT.format(organization_id=organization_id, group_id=group_id)
        await self._execute("DELETE", url)

    # ------------------------------------------------------------------ #
    #  Internal HTTP layer
    # ------------------------------------------------------------------ #

    async def _request(
        self,
        shape: Any,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        """Execute a request and validate the response body against ``shape``.

        Raises:
            ApiError: On any failed request (after rate-limit retries).
            ResponseValidationError: If the body does not match ``shape``.
        """
        data = await self._execute(method, path, params=params, json_body=json_body)
        return validate(shape, data)

    async def _execute(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        request = RequestDescriptor(
            method=method,
            path=path,
            params=tuple((params or {}).items()),
            body=json_body,
        )
        return await self._pipeline.execute(request)
