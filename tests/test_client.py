"""Tests for the endpoint wrappers on TogglApiClient."""

from __future__ import annotations

import pytest

from toggl_api import (
    ApiError,
    ErrorKind,
    ResponseValidationError,
    TimeEntry,
    TimeEntryCreate,
    TogglApiClient,
    User,
)

from conftest import (
    FakeResponse,
    FakeSession,
    make_config,
    run,
    time_entry_payload,
    user_payload,
)

BASE = "https://api.track.toggl.com/api/v9"


# =========================================================================== #
#  1. Me
# =========================================================================== #


class TestMe:
    def test_get_me_validates_user(self, client, session):
        session.add("/me", FakeResponse(body=user_payload()))

        user = run(client.async_get_me())

        assert isinstance(user, User)
        assert user.email == "ada@example.com"
        call = session.calls[0]
        assert (call.method, call.url) == ("GET", f"{BASE}/me")

    def test_get_me_with_related_data(self, client, session):
        session.add("/me", FakeResponse(body=user_payload()))
        run(client.async_get_me(with_related_data=True))
        assert session.calls[0].kwargs["params"] == [("with_related_data", "true")]

    def test_quota_is_a_list(self, client, session):
        session.add(
            "/me/quota",
            FakeResponse(
                body=[
                    {"remaining": 29, "total": 30, "resets_in_secs": 600, "organization_id": 9}
                ]
            ),
        )
        quota = run(client.async_get_quota())
        assert quota[0].remaining == 29

    def test_malformed_response_raises_validation_failure(self, client, session):
        session.add("/me", FakeResponse(body=user_payload(id="one", email=None)))

        with pytest.raises(ResponseValidationError) as excinfo:
            run(client.async_get_me())

        assert "id: " in str(excinfo.value)
        assert "email: " in str(excinfo.value)
        assert len(session.calls) == 1


# =========================================================================== #
#  2. Time entries
# =========================================================================== #


class TestTimeEntries:
    def test_list_passes_date_filters_in_order(self, client, session):
        session.add("/me/time_entries", FakeResponse(body=[time_entry_payload()]))

        entries = run(
            client.async_get_time_entries(
                start_date="2024-03-01T00:00:00+00:00",
                end_date="2024-03-02T00:00:00+00:00",
            )
        )

        assert [e.id for e in entries] == [1001]
        assert session.calls[0].kwargs["params"] == [
            ("start_date", "2024-03-01T00:00:00+00:00"),
            ("end_date", "2024-03-02T00:00:00+00:00"),
        ]

    def test_current_returns_none_when_nothing_runs(self, client, session):
        session.add("/me/time_entries/current", FakeResponse(body=None))
        assert run(client.async_get_current_time_entry()) is None

    def test_current_returns_none_for_json_null(self, client, session):
        session.add("/me/time_entries/current", FakeResponse(body="null"))
        assert run(client.async_get_current_time_entry()) is None

    def test_current_returns_running_entry(self, client, session):
        session.add("/me/time_entries/current", FakeResponse(body=time_entry_payload()))
        entry = run(client.async_get_current_time_entry())
        assert isinstance(entry, TimeEntry)
        assert entry.is_running

    def test_start_creates_running_entry_without_unset_fields(self, client, session):
        session.add("/workspaces/42/time_entries", FakeResponse(body=time_entry_payload()))

        run(client.async_start_time_entry(42, description="Writing tests", tags=["dev"]))

        call = session.calls[0]
        assert call.method == "POST"
        body = call.kwargs["json"]
        assert body["workspace_id"] == 42
        assert body["created_with"] == "toggl-cli"
        assert body["duration"] < 0
        assert body["description"] == "Writing tests"
        assert body["tags"] == ["dev"]
        assert "project_id" not in body
        assert "stop" not in body

    def test_create_uses_workspace_from_url(self, client, session):
        session.add("/workspaces/7/time_entries", FakeResponse(body=time_entry_payload()))
        entry = TimeEntryCreate(
            workspace_id=42, start="2024-03-01T09:00:00+00:00", duration=3600
        )

        run(client.async_create_time_entry(7, entry))

        assert session.calls[0].kwargs["json"]["workspace_id"] == 7

    def test_stop_patches_entry(self, client, session):
        session.add(
            "/workspaces/42/time_entries/1001/stop",
            FakeResponse(body=time_entry_payload(stop="2024-03-01T10:00:00+00:00", duration=3600)),
        )

        entry = run(client.async_stop_time_entry(42, 1001))

        assert session.calls[0].method == "PATCH"
        assert not entry.is_running

    def test_update_keeps_explicit_nulls(self, client, session):
        session.add("/workspaces/42/time_entries/1001", FakeResponse(body=time_entry_payload()))

        run(client.async_update_time_entry(42, 1001, {"project_id": None, "description": "x"}))

        call = session.calls[0]
        assert call.method == "PUT"
        assert call.kwargs["json"] == {"project_id": None, "description": "x"}

    def test_delete_returns_none_without_validation(self, client, session):
        session.add("/workspaces/42/time_entries/1001", FakeResponse(status=200, body=None))
        assert run(client.async_delete_time_entry(42, 1001)) is None
        assert session.calls[0].method == "DELETE"

    def test_missing_entry_raises_not_found(self, client, session):
        session.add("/me/time_entries/5", FakeResponse(status=404, body={"error": "Time entry not found"}))

        with pytest.raises(ApiError) as excinfo:
            run(client.async_get_time_entry(5))

        assert excinfo.value.kind is ErrorKind.NOT_FOUND
        assert excinfo.value.message == "Time entry not found"


# =========================================================================== #
#  3. Workspace resources
# =========================================================================== #


class TestWorkspaceResources:
    def test_projects_active_filter(self, client, session):
        session.add("/workspaces/42/projects", FakeResponse(body=[]))
        run(client.async_get_projects(42, active=False))
        assert session.calls[0].kwargs["params"] == [("active", "false")]

    def test_projects_without_filter_send_no_params(self, client, session):
        session.add("/workspaces/42/projects", FakeResponse(body=[]))
        assert run(client.async_get_projects(42)) == []
        assert session.calls[0].kwargs.get("params", []) == []

    def test_create_client_sets_wid(self, client, session):
        session.add(
            "/workspaces/42/clients",
            FakeResponse(body={"id": 3, "name": "ACME", "at": "2024-01-01T00:00:00Z", "wid": 42}),
        )

        created = run(client.async_create_client(42, {"name": "ACME", "notes": None}))

        assert created.name == "ACME"
        assert session.calls[0].kwargs["json"] == {"name": "ACME", "wid": 42}

    def test_update_project_can_clear_client(self, client, session):
        session.add(
            "/workspaces/42/projects/7",
            FakeResponse(
                body={
                    "id": 7,
                    "workspace_id": 42,
                    "client_id": None,
                    "name": "Site",
                    "is_private": False,
                    "active": True,
                    "at": "2024-01-01T00:00:00Z",
                    "color": "#06aaf5",
                }
            ),
        )
        run(client.async_update_project(42, 7, {"client_id": None}))
        assert session.calls[0].kwargs["json"] == {"client_id": None}

    def test_archive_client(self, client, session):
        session.add(
            "/workspaces/42/clients/3/archive",
            FakeResponse(body={"id": 3, "name": "ACME", "at": "2024-01-01T00:00:00Z", "archived": True}),
        )
        assert run(client.async_archive_client(42, 3)).archived is True

    def test_create_tag(self, client, session):
        session.add(
            "/workspaces/42/tags",
            FakeResponse(body={"id": 9, "workspace_id": 42, "name": "dev", "at": "2024-01-01T00:00:00Z"}),
        )
        run(client.async_create_tag(42, "dev"))
        assert session.calls[0].kwargs["json"] == {"name": "dev", "workspace_id": 42}

    def test_tasks_path(self, client, session):
        session.add("/workspaces/42/projects/7/tasks", FakeResponse(body=[]))
        run(client.async_get_tasks(42, 7, active=True))
        assert session.calls[0].url == f"{BASE}/workspaces/42/projects/7/tasks"

    def test_groups_under_organization(self, client, session):
        session.add(
            "/organizations/9/groups",
            FakeResponse(body=[{"group_id": 1, "name": "Team", "workspaces": [42]}]),
        )
        groups = run(client.async_get_groups(9))
        assert groups[0].workspaces == [42]


# =========================================================================== #
#  4. Lifecycle
# =========================================================================== #


class TestLifecycle:
    def test_does_not_close_borrowed_session(self):
        session = FakeSession()

        async def scenario() -> None:
            async with TogglApiClient(make_config(), session):  # type: ignore[arg-type]
                pass

        run(scenario())
        assert session.closed is False

    def test_rate_limited_wrapper_retries(self, client, session, sleep):
        session.add(
            "/workspaces",
            FakeResponse(status=429, headers={"Retry-After": "4"}),
            FakeResponse(body=[{"id": 42, "name": "Main", "premium": False}]),
        )

        workspaces = run(client.async_get_workspaces())

        assert workspaces[0].name == "Main"
        assert sleep.delays == [4]
