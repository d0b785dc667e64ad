"""Constants for the Toggl Track API client."""

__version__ = "0.1.0"

BASE_URL = "https://api.track.toggl.com/api/v9"

ME_ENDPOINT = "/me"
ME_PREFERENCES_ENDPOINT = "/me/preferences"
ME_QUOTA_ENDPOINT = "/me/quota"
ME_TIME_ENTRIES_ENDPOINT = "/me/time_entries"
ME_CURRENT_TIME_ENTRY_ENDPOINT = "/me/time_entries/current"
ME_TIME_ENTRY_ENDPOINT = "/me/time_entries/{time_entry_id}"

WORKSPACES_ENDPOINT = "/workspaces"
WORKSPACE_ENDPOINT = "/workspaces/{workspace_id}"
WORKSPACE_USERS_ENDPOINT = "/workspaces/{workspace_id}/users"

TIME_ENTRIES_ENDPOINT = "/workspaces/{workspace_id}/time_entries"
TIME_ENTRY_ENDPOINT = "/workspaces/{workspace_id}/time_entries/{time_entry_id}"
TIME_ENTRY_STOP_ENDPOINT = (
    "/workspaces/{workspace_id}/time_entries/{time_entry_id}/stop"
)

PROJECTS_ENDPOINT = "/workspaces/{workspace_id}/projects"
PROJECT_ENDPOINT = "/workspaces/{workspace_id}/projects/{project_id}"

CLIENTS_ENDPOINT = "/workspaces/{workspace_id}/clients"
CLIENT_ENDPOINT = "/workspaces/{workspace_id}/clients/{client_id}"
CLIENT_ARCHIVE_ENDPOINT = "/workspaces/{workspace_id}/clients/{client_id}/archive"
CLIENT_RESTORE_ENDPOINT = "/workspaces/{workspace_id}/clients/{client_id}/restore"

TAGS_ENDPOINT = "/workspaces/{workspace_id}/tags"
TAG_ENDPOINT = "/workspaces/{workspace_id}/tags/{tag_id}"

TASKS_ENDPOINT = "/workspaces/{workspace_id}/projects/{project_id}/tasks"
TASK_ENDPOINT = "/workspaces/{workspace_id}/projects/{project_id}/tasks/{task_id}"

ORGANIZATION_ENDPOINT = "/organizations/{organization_id}"
ORGANIZATION_USERS_ENDPOINT = "/organizations/{organization_id}/users"
GROUPS_ENDPOINT = "/organizations/{organization_id}/groups"
GROUP_ENDPOINT = "/organizations/{organization_id}/groups/{group_id}"

# Toggl expects the token as username and this literal as password.
API_TOKEN_PASSWORD = "api_token"
CREATED_WITH = "toggl-cli"

ENV_API_TOKEN = "TOGGL_API_TOKEN"
ENV_WORKSPACE_ID = "TOGGL_WORKSPACE_ID"
ENV_DEBUG_API_ERRORS = "DEBUG_API_ERRORS"

DEFAULT_TIMEOUT_SECONDS = 30.0
MAX_RATE_LIMIT_RETRIES = 3
DEFAULT_RETRY_AFTER_SECONDS = 1

# Reported when no HTTP response was received at all.
NO_RESPONSE_STATUS = 500
