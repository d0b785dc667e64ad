"""Command-line interface for Toggl Track."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timezone
from typing import Any, List, Optional

import typer
from dateutil.parser import parse as dtparse
from dotenv import load_dotenv
from pydantic import TypeAdapter

from toggl_api import (
    ApiError,
    ClientConfig,
    ErrorKind,
    TogglApiClient,
    TogglError,
)

_LOGGER = logging.getLogger(__name__)

app = typer.Typer(help="Command-line client for Toggl Track", no_args_is_help=True)
workspace_app = typer.Typer(help="Workspace commands")
entry_app = typer.Typer(help="Time entry commands")
project_app = typer.Typer(help="Project commands")
client_app = typer.Typer(help="Client commands")
tag_app = typer.Typer(help="Tag commands")
task_app = typer.Typer(help="Task commands")

app.add_typer(workspace_app, name="workspace")
app.add_typer(entry_app, name="entry")
app.add_typer(project_app, name="project")
app.add_typer(client_app, name="client")
app.add_typer(tag_app, name="tag")
app.add_typer(task_app, name="task")

Action = Callable[[TogglApiClient, ClientConfig], Awaitable[Any]]

_OUTPUT = TypeAdapter(Any)


@dataclass(frozen=True)
class CliState:
    """Global options, resolved into a ``ClientConfig`` per command."""

    api_token: Optional[str] = None
    workspace_id: Optional[int] = None


@app.callback()
def main(
    ctx: typer.Context,
    api_token: Optional[str] = typer.Option(
        None, "--api-token", help="Toggl API token (overrides TOGGL_API_TOKEN)"
    ),
    workspace: Optional[int] = typer.Option(
        None, "--workspace", help="Default workspace ID (overrides TOGGL_WORKSPACE_ID)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
) -> None:
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    ctx.obj = CliState(api_token=api_token, workspace_id=workspace)


@app.command("me")
def me(
    ctx: typer.Context,
    with_related_data: bool = typer.Option(
        False, "--with-related-data", help="Include related workspace data"
    ),
) -> None:
    """Show the authenticated user."""
    _run(ctx, lambda client, _: client.async_get_me(with_related_data=with_related_data))


@workspace_app.command("list")
def workspace_list(ctx: typer.Context) -> None:
    _run(ctx, lambda client, _: client.async_get_workspaces())


@entry_app.command("list")
def entry_list(
    ctx: typer.Context,
    start_date: Optional[str] = typer.Option(None, "--start-date", help="Start date or date-time"),
    end_date: Optional[str] = typer.Option(None, "--end-date", help="End date or date-time"),
) -> None:
    """List your time entries."""
    start = parse_date(start_date, "start-date") if start_date else None
    end = parse_date(end_date, "end-date") if end_date else None
    _run(
        ctx,
        lambda client, _: client.async_get_time_entries(start_date=start, end_date=end)
    )


@entry_app.command("current")
def entry_current(ctx: typer.Context) -> None:
    """Show the running time entry (``null`` if none)."""
    _run(ctx, lambda client, _: client.async_get_current_time_entry())


@entry_app.command("start")
def entry_start(
    ctx: typer.Context,
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    project: Optional[int] = typer.Option(None, "--project", "-p", help="Project ID"),
    task: Optional[int] = typer.Option(None, "--task", help="Task ID"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", help="Tag name (repeatable)"),
    billable: Optional[bool] = typer.Option(None, "--billable/--not-billable"),
) -> None:
    """Start a timer in the default workspace."""

    async def action(client: TogglApiClient, config: ClientConfig) -> Any:
        return await client.async_start_time_entry(
            config.require_workspace(),
            description=description,
            project_id=project,
            task_id=task,
            tags=list(tag) if tag else None,
            billable=billable,
        )

    _run(ctx, action)


@entry_app.command("stop")
def entry_stop(
    ctx: typer.Context,
    entry_id: Optional[int] = typer.Argument(None, help="Entry to stop (default: running)"),
) -> None:
    """Stop a running time entry."""

    async def action(client: TogglApiClient, config: ClientConfig) -> Any:
        if entry_id is not None:
            return await client.async_stop_time_entry(config.require_workspace(), entry_id)
        current = await client.async_get_current_time_entry()
        if current is None:
            raise TogglError("No time entry is currently running")
        return await client.async_stop_time_entry(current.workspace_id, current.id)

    _run(ctx, action)


@project_app.command("list")
def project_list(
    ctx: typer.Context,
    active: Optional[bool] = typer.Option(None, "--active/--inactive"),
) -> None:
    _run(
        ctx,
        lambda client, config: client.async_get_projects(
            config.require_workspace(), active=active
        )
    )


@client_app.command("list")
def client_list(
    ctx: typer.Context,
    status: Optional[str] = typer.Option(
        None, "--status", help="active, archived or both"
    ),
) -> None:
    _run(
        ctx,
        lambda client, config: client.async_get_clients(
            config.require_workspace(), status=status
        )
    )


@tag_app.command("list")
def tag_list(ctx: typer.Context) -> None:
    _run(ctx, lambda client, config: client.async_get_tags(config.require_workspace()))


@task_app.command("list")
def task_list(
    ctx: typer.Context,
    project: int = typer.Option(..., "--project", "-p", help="Project ID"),
    active: Optional[bool] = typer.Option(None, "--active/--inactive"),
) -> None:
    _run(
        ctx,
        lambda client, config: client.async_get_tasks(
            config.require_workspace(), project, active=active
        )
    )


def parse_date(value: str, field_name: str) -> str:
    """Normalize a date/time string to an ISO 8601 UTC timestamp.

    Accepts anything dateutil understands, ISO 8601 or free-form such as
    ``March 1 2024``. Naive values are taken as local time.
    """
    try:
        parsed = dtparse(value)
    except (ValueError, OverflowError):
        raise typer.BadParameter(f"{field_name} must be a valid date") from None
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed.astimezone(timezone.utc).isoformat(timespec="seconds")


def _run(ctx: typer.Context, action: Action) -> None:
    """Resolve config, execute ``action`` and print its result as JSON.

    Exits with status 1 on any client error.
    """
    state: CliState = ctx.obj or CliState()
    try:
        config = ClientConfig.from_env(state.api_token, state.workspace_id)
        result = asyncio.run(_call(config, action))
    except ApiError as err:
        typer.echo(f"Error: {err.message}", err=True)
        if err.kind is ErrorKind.RATE_LIMIT and err.retry_after is not None:
            typer.echo(f"Retry after {err.retry_after} seconds.", err=True)
        _LOGGER.debug("Request failed: %r", err)
        raise typer.Exit(code=1) from err
    except TogglError as err:
        typer.echo(f"Error: {err}", err=True)
        raise typer.Exit(code=1) from err

    typer.echo(_OUTPUT.dump_json(result, indent=2).decode())


async def _call(config: ClientConfig, action: Action) -> Any:
    async with TogglApiClient(config) as client:
        return await action(client, config)
