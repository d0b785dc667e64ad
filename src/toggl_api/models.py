"""Data models for Toggl Track API responses.

Each model is a declared response shape: required fields must be present
with the right primitive type, ``X | None`` fields without a default must be
present but may be null, and fields with a default may be omitted. Fields
the API adds that are not declared here are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from ._serialization import drop_none
from .const import CREATED_WITH


class TogglModel(BaseModel):
    """Base for all response shapes: strict, immutable, extra keys ignored."""

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")


class User(TogglModel):
    """The authenticated user (``/me``)."""

    id: int
    email: str
    fullname: str
    timezone: str
    default_workspace_id: int
    beginning_of_week: int
    image_url: str | None
    created_at: str
    updated_at: str | None = None
    country_id: int | None = None
    has_password: bool | None = None
    at: str | None = None
    openid_enabled: bool | None = None
    openid_email: str | None = None


class UserPreferences(TogglModel):
    """Display and notification preferences of the authenticated user."""

    date_format: str | None = None
    duration_format: str | None = None
    timeofday_format: str | None = None
    record_timeline: bool | None = None
    send_product_emails: bool | None = None
    send_weekly_report: bool | None = None
    send_timer_notifications: bool | None = None


class OrganizationQuota(TogglModel):
    """Remaining API requests for one organization."""

    remaining: int
    total: int
    resets_in_secs: int
    organization_id: int


class Workspace(TogglModel):
    id: int
    name: str
    premium: bool
    organization_id: int | None = None
    profile: int | None = None
    business_ws: bool | None = None
    admin: bool | None = None
    default_hourly_rate: float | None = None
    default_currency: str | None = None
    only_admins_may_create_projects: bool | None = None
    only_admins_may_create_tags: bool | None = None
    only_admins_see_billable_rates: bool | None = None
    projects_billable_by_default: bool | None = None
    projects_private_by_default: bool | None = None
    rounding: int | None = None
    rounding_minutes: int | None = None
    at: str | None = None
    logo_url: str | None = None
    ical_url: str | None = None
    ical_enabled: bool | None = None
    suspended_at: str | None = None
    server_deleted_at: str | None = None


class WorkspaceUser(TogglModel):
    id: int
    user_id: int
    workspace_id: int
    admin: bool
    active: bool
    email: str | None = None
    name: str | None = None
    inactive: bool | None = None
    at: str | None = None
    group_ids: list[int] | None = None
    rate: float | None = None
    labour_cost: float | None = None
    timezone: str | None = None


class TimeEntry(TogglModel):
    """A tracked time entry.

    ``duration`` is negative while the entry is running; ``stop`` is null
    until it is stopped.
    """

    id: int
    workspace_id: int
    project_id: int | None
    billable: bool
    start: str
    stop: str | None
    duration: int
    description: str | None
    at: str
    user_id: int
    task_id: int | None = None
    tags: list[str] | None = None
    tag_ids: list[int] | None = None
    duronly: bool | None = None
    server_deleted_at: str | None = None

    @property
    def is_running(self) -> bool:
        """Whether the timer for this entry is still running."""
        return self.duration < 0


class TimeEntryCreate(TogglModel):
    """Data for creating a time entry.

    For a running entry pass ``duration=-<start unix seconds>`` and no
    ``stop``.
    """

    workspace_id: int
    start: str
    duration: int
    created_with: str = CREATED_WITH
    description: str | None = None
    project_id: int | None = None
    task_id: int | None = None
    billable: bool | None = None
    stop: str | None = None
    tags: list[str] | None = None
    tag_ids: list[int] | None = None

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to a request body, leaving out unset fields."""
        return drop_none(self.model_dump())


class Project(TogglModel):
    id: int
    workspace_id: int
    client_id: int | None
    name: str
    is_private: bool
    active: bool
    at: str
    color: str
    created_at: str | None = None
    server_deleted_at: str | None = None
    billable: bool | None = None
    template: bool | None = None
    auto_estimates: bool | None = None
    estimated_hours: float | None = None
    rate: float | None = None
    currency: str | None = None
    recurring: bool | None = None
    fixed_fee: float | None = None
    actual_hours: float | None = None


class Client(TogglModel):
    """A client of a workspace (not to be confused with ``TogglApiClient``)."""

    id: int
    name: str
    at: str
    wid: int | None = None
    workspace_id: int | None = None
    archived: bool | None = None
    server_deleted_at: str | None = None
    notes: str | None = None


class Tag(TogglModel):
    id: int
    workspace_id: int
    name: str
    at: str
    deleted_at: str | None = None


class Task(TogglModel):
    id: int
    name: str
    workspace_id: int
    project_id: int
    active: bool
    at: str
    user_id: int | None = None
    estimated_seconds: int | None = None
    tracked_seconds: int | None = None
    server_deleted_at: str | None = None


class Organization(TogglModel):
    id: int
    name: str
    pricing_plan_id: int | None = None
    created_at: str | None = None
    at: str | None = None
    server_deleted_at: str | None = None
    is_multi_workspace_enabled: bool | None = None
    suspended_at: str | None = None
    user_count: int | None = None
    max_workspaces: int | None = None
    admin: bool | None = None
    owner: bool | None = None


class OrganizationUserGroup(TogglModel):
    group_id: int
    name: str


class OrganizationUserWorkspace(TogglModel):
    workspace_id: int
    name: str
    admin: bool


class OrganizationUser(TogglModel):
    id: int
    user_id: int
    organization_id: int
    admin: bool
    owner: bool | None = None
    name: str | None = None
    email: str | None = None
    avatar_url: str | None = None
    joined: bool | None = None
    inactive: bool | None = None
    groups: list[OrganizationUserGroup] | None = None
    workspaces: list[OrganizationUserWorkspace] | None = None


class GroupUser(TogglModel):
    user_id: int
    name: str | None = None


class Group(TogglModel):
    group_id: int
    name: str
    at: str | None = None
    users: list[GroupUser] | None = None
    workspaces: list[int] | None = None
