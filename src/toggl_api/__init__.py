"""Async Python client for the Toggl Track API."""

from .const import __version__
from ._client import TogglApiClient
from ._retry import RetryPipeline
from ._transport import RawResponse, RequestDescriptor, Transport, TransportFailure
from ._validation import validate
from .config import ClientConfig
from .exceptions import (
    ApiError,
    ConfigurationError,
    ErrorKind,
    FieldError,
    ResponseValidationError,
    TogglError,
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

__all__ = [
    "__version__",
    "TogglApiClient",
    "ClientConfig",
    "RetryPipeline",
    "RawResponse",
    "RequestDescriptor",
    "Transport",
    "TransportFailure",
    "validate",
    "ApiError",
    "ConfigurationError",
    "ErrorKind",
    "FieldError",
    "ResponseValidationError",
    "TogglError",
    "Client",
    "Group",
    "Organization",
    "OrganizationQuota",
    "OrganizationUser",
    "Project",
    "Tag",
    "Task",
    "TimeEntry",
    "TimeEntryCreate",
    "User",
    "UserPreferences",
    "Workspace",
    "WorkspaceUser",
]
