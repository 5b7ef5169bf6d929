"""
RecruitDesk Command Line Interface

Provides CLI commands for the recruiter dashboard: database setup, listings,
statistics, application review, pipeline moves, live sync and email
templates. Every data command is gated on the signed-in user's permissions.
"""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from recruitdesk.auth.guards import AuthState, GuardOutcome, permission_guard, resolve_auth_state
from recruitdesk.auth.identity import CurrentUser
from recruitdesk.auth.permissions import PermissionLike
from recruitdesk.auth.session import SessionStore
from recruitdesk.utils.config import get_settings
from recruitdesk.utils.logger import setup_logging

app = typer.Typer(
    name="recruitdesk",
    help="Recruiter dashboard CLI",
    add_completion=False,
)
console = Console()


@app.callback()
def _configure() -> None:
    """Recruiter dashboard CLI."""
    setup_logging()


STATUS_COLORS = {
    "draft": "dim",
    "open": "green",
    "on_hold": "yellow",
    "closed": "red",
    "cancelled": "dim",
    "new": "cyan",
    "active": "yellow",
    "interviewing": "blue",
    "offer_extended": "magenta",
    "hired": "green",
    "rejected": "red",
    "withdrawn": "dim",
    "pending": "cyan",
    "under_review": "yellow",
    "approved": "green",
}


# =============================================================================
# Helpers
# =============================================================================


def _session_store() -> SessionStore:
    return SessionStore(get_settings().auth.session_file)


def _auth_state() -> AuthState:
    """Resolve the signed-in user from AUTH_SESSION_TOKEN or the stored session."""
    token = get_settings().auth.session_token or _session_store().access_token
    return resolve_auth_state(token)


def _guard(permission: PermissionLike) -> CurrentUser:
    """Return the current user, or print why access is refused and exit."""
    state = _auth_state()
    decision = permission_guard(state, permission)
    if decision.outcome == GuardOutcome.ALLOW:
        return state.user
    if decision.outcome == GuardOutcome.DENY:
        console.print(f"[red]{decision.message}[/red]")
    else:
        console.print("[red]Not signed in. Run 'recruitdesk login' or set AUTH_SESSION_TOKEN.[/red]")
    raise typer.Exit(1)


def _require_db() -> None:
    from recruitdesk.data.database import get_database_manager

    if not get_database_manager().check_sync_connection():
        console.print("[red]Error: Could not connect to MongoDB. Run 'init-db' first.[/red]")
        raise typer.Exit(1)


def _colored(status: str) -> str:
    color = STATUS_COLORS.get(status, "white")
    return f"[{color}]{status.upper()}[/{color}]"


def _truncate(text: Optional[str], width: int) -> str:
    text = text or ""
    return text[:width] + "..." if len(text) > width else text


# =============================================================================
# System
# =============================================================================


@app.command()
def version():
    """Show application version."""
    from recruitdesk import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show configuration."""
    settings = get_settings()

    table = Table(title="RecruitDesk Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Transactions", str(settings.database.use_transactions))
    table.add_row("API Base URL", settings.api_base_url)
    table.add_row("Sync Mode", settings.sync.mode)
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db(
    seed_pipelines: bool = typer.Option(True, "--seed-pipelines/--no-seed-pipelines", help="Create default pipelines"),
):
    """Initialize the database with required indexes and default pipelines."""
    from pymongo.errors import PyMongoError

    from recruitdesk.data.database import get_database_manager
    from recruitdesk.data.repositories import get_pipeline_repository

    console.print("[yellow]Initializing database...[/yellow]")

    db_manager = get_database_manager()
    console.print("  Checking database connection...")
    if not db_manager.check_sync_connection():
        console.print("[red]Error: Could not connect to MongoDB.[/red]")
        console.print("[dim]Make sure MongoDB is running and connection settings are correct.[/dim]")
        raise typer.Exit(1)
    console.print("  [green]✓[/green] Connected to MongoDB")

    try:
        console.print("  Creating indexes...")
        created = db_manager.ensure_indexes()
        console.print(f"  [green]✓[/green] Indexes created on {len(created)} collections")

        if seed_pipelines:
            seeded = get_pipeline_repository().seed_defaults()
            console.print(f"  [green]✓[/green] {len(seeded)} default pipeline(s) created")
    except PyMongoError as e:
        console.print(f"[red]Error initializing database: {e}[/red]")
        raise typer.Exit(1)

    console.print("\n[green]Database initialized successfully![/green]")


@app.command()
def health_check():
    """Check database and backend connectivity."""
    import httpx

    from recruitdesk.data.database import get_database_manager

    console.print("[bold cyan]System Health Check[/bold cyan]")
    console.print(f"[dim]{'─' * 50}[/dim]")

    settings = get_settings()
    all_healthy = True

    console.print("\n[bold]Database:[/bold]")
    if get_database_manager().check_sync_connection():
        console.print("  [green]✓[/green] MongoDB connected")
        console.print(f"    Host: {settings.database.host}:{settings.database.port}")
        console.print(f"    Database: {settings.database.name}")
    else:
        console.print("  [red]✗[/red] MongoDB not connected")
        all_healthy = False

    console.print("\n[bold]REST Backend:[/bold]")
    try:
        response = httpx.get(settings.api_base_url, timeout=settings.api.timeout_seconds)
        console.print(f"  [green]✓[/green] {settings.api_base_url} reachable (HTTP {response.status_code})")
    except httpx.HTTPError as e:
        console.print(f"  [red]✗[/red] {settings.api_base_url} unreachable: {e}")
        all_healthy = False

    console.print("\n[bold]Session:[/bold]")
    state = _auth_state()
    if state.user:
        console.print(f"  [green]✓[/green] Signed in as {state.user.full_name}")
    else:
        console.print("  [yellow]○[/yellow] Not signed in")

    console.print(f"\n[dim]{'─' * 50}[/dim]")
    if all_healthy:
        console.print("[green]All critical systems operational.[/green]")
    else:
        console.print("[red]Some systems require attention.[/red]")


# =============================================================================
# Session
# =============================================================================


@app.command()
def login(
    email: str = typer.Option(..., "--email", "-e", help="Account email"),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
):
    """Sign in to the REST backend and store the session tokens."""
    import httpx

    from recruitdesk.api import ApiClient, AuthApi
    from recruitdesk.core.exceptions import ApiError

    async def _login():
        async with ApiClient(session=_session_store()) as client:
            return await AuthApi(client).login(email, password)

    try:
        session = asyncio.run(_login())
    except (ApiError, httpx.HTTPError) as e:
        console.print(f"[red]Login failed: {e}[/red]")
        raise typer.Exit(1)

    name = session.user.full_name if session.user else email
    console.print(f"[green]Signed in as {name}[/green]")


@app.command()
def logout():
    """Sign out and clear the stored session tokens."""
    import httpx

    from recruitdesk.api import ApiClient, AuthApi
    from recruitdesk.core.exceptions import ApiError

    async def _logout():
        async with ApiClient(session=_session_store()) as client:
            await AuthApi(client).logout()

    try:
        asyncio.run(_logout())
    except (ApiError, httpx.HTTPError) as e:
        console.print(f"[yellow]Backend sign-out failed ({e}); local session cleared.[/yellow]")
    console.print("[green]Signed out.[/green]")


@app.command()
def whoami():
    """Show the signed-in user and their role."""
    from recruitdesk.auth.permissions import ROLE_DESCRIPTIONS, get_role_label

    state = _auth_state()
    if state.user is None:
        console.print("[yellow]Not signed in.[/yellow]")
        raise typer.Exit(1)

    user = state.user
    console.print(f"[bold]{user.full_name}[/bold] <{user.email or 'no email'}>")
    console.print(f"  Role: [cyan]{get_role_label(user.role)}[/cyan] - {ROLE_DESCRIPTIONS[user.role]}")
    console.print(f"  Permissions: {len(user.permissions)}")


@app.command()
def permissions(
    role: Optional[str] = typer.Option(None, "--role", "-r", help="Show only this role"),
):
    """Show the role/permission matrix."""
    from recruitdesk.auth.permissions import ROLE_PERMISSIONS, Permission, get_role_label
    from recruitdesk.utils.constants import UserRole

    if role:
        try:
            roles = [UserRole(role)]
        except ValueError:
            console.print(f"[red]Invalid role: {role}[/red]")
            console.print(f"[dim]Valid roles: {', '.join(r.value for r in UserRole)}[/dim]")
            raise typer.Exit(1)
    else:
        roles = list(UserRole)

    table = Table(title="Role Permissions")
    table.add_column("Permission", style="cyan")
    for r in roles:
        table.add_column(get_role_label(r), justify="center")

    for permission in Permission:
        table.add_row(
            permission.value,
            *("[green]✓[/green]" if permission in ROLE_PERMISSIONS[r] else "[dim]-[/dim]" for r in roles),
        )

    console.print(table)


@app.command()
def select_job(
    job_id: Optional[str] = typer.Argument(None, help="Job to show on the pipeline board"),
    clear: bool = typer.Option(False, "--clear", help="Clear the selection"),
):
    """Remember the pipeline board's selected job."""
    from recruitdesk.auth.permissions import Permission

    _guard(Permission.JOBS_VIEW)
    store = _session_store()

    if clear:
        store.clear_job_selection()
        console.print("[green]Job selection cleared.[/green]")
        return
    if not job_id:
        current = store.selected_job_id
        console.print(f"Selected job: [cyan]{current}[/cyan]" if current else "[yellow]No job selected.[/yellow]")
        return

    from recruitdesk.data.repositories import get_job_repository

    _require_db()
    job = get_job_repository().get_by_id(job_id)
    if job is None:
        console.print(f"[red]Job not found: {job_id}[/red]")
        raise typer.Exit(1)

    store.save_job_selection(job_id)
    console.print(f"[green]Selected job:[/green] {job.title} ({job_id})")


# =============================================================================
# Listings
# =============================================================================


@app.command()
def list_clients(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status"),
    limit: int = typer.Option(20, "--limit", "-l", help="Maximum number of clients to show"),
):
    """List clients."""
    from recruitdesk.auth.permissions import Permission
    from recruitdesk.data.repositories import get_client_repository

    _guard(Permission.CLIENTS_VIEW)
    _require_db()

    query = {"status": status} if status else {}
    clients = get_client_repository().find(query, limit=limit)
    if not clients:
        console.print("[yellow]No clients found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Clients ({len(clients)} shown)")
    table.add_column("ID", style="dim", width=24)
    table.add_column("Company", style="cyan")
    table.add_column("Type")
    table.add_column("Status", justify="center")
    table.add_column("Jobs", justify="right")

    for client in clients:
        table.add_row(
            client.id,
            _truncate(client.company_name, 40),
            client.type,
            _colored(client.status),
            str(len(client.job_ids)),
        )
    console.print(table)


@app.command()
def list_jobs(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status (draft/open/on_hold/closed/cancelled)"),
    client_id: Optional[str] = typer.Option(None, "--client", "-c", help="Filter by client"),
    limit: int = typer.Option(20, "--limit", "-l", help="Maximum number of jobs to show"),
):
    """List jobs."""
    from recruitdesk.auth.permissions import Permission
    from recruitdesk.data.repositories import get_job_repository
    from recruitdesk.utils.constants import JobStatus

    _guard(Permission.JOBS_VIEW)
    _require_db()

    query = {}
    if status:
        try:
            query["status"] = JobStatus(status.lower()).value
        except ValueError:
            console.print(f"[red]Invalid status: {status}[/red]")
            console.print(f"[dim]Valid statuses: {', '.join(s.value for s in JobStatus)}[/dim]")
            raise typer.Exit(1)
    if client_id:
        query["client_id"] = client_id

    jobs = get_job_repository().find(query, limit=limit)
    if not jobs:
        console.print("[yellow]No jobs found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Jobs ({len(jobs)} shown)")
    table.add_column("ID", style="dim", width=24)
    table.add_column("Title", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Openings", justify="right")
    table.add_column("Candidates", justify="right")

    for job in jobs:
        table.add_row(
            job.id,
            _truncate(job.title, 40),
            _colored(job.status),
            f"{job.filled_positions}/{job.openings}",
            str(len(job.candidate_ids)),
        )
    console.print(table)


@app.command()
def list_candidates(
    job_id: Optional[str] = typer.Option(None, "--job", "-j", help="Only candidates on this job"),
    limit: int = typer.Option(20, "--limit", "-l", help="Maximum number of candidates to show"),
):
    """List candidates."""
    from recruitdesk.auth.permissions import Permission
    from recruitdesk.data.repositories import get_candidate_repository

    _guard(Permission.CANDIDATES_VIEW)
    _require_db()

    repo = get_candidate_repository()
    candidates = repo.get_by_job(job_id)[:limit] if job_id else repo.find({}, limit=limit)
    if not candidates:
        console.print("[yellow]No candidates found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Candidates ({len(candidates)} shown)")
    table.add_column("ID", style="dim", width=24)
    table.add_column("Name", style="cyan")
    table.add_column("Email")
    table.add_column("Jobs", justify="right")
    table.add_column("Status", justify="center")

    for candidate in candidates:
        status = candidate.status_for_job(job_id) if job_id else candidate.overall_status
        table.add_row(
            candidate.id,
            _truncate(candidate.full_name, 30),
            _truncate(candidate.email, 30),
            str(len(candidate.job_ids)),
            _colored(status or "new"),
        )
    console.print(table)


@app.command()
def list_applications(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status"),
    limit: int = typer.Option(20, "--limit", "-l", help="Maximum number of applications to show"),
):
    """List inbound applications."""
    from recruitdesk.auth.permissions import Permission
    from recruitdesk.data.repositories import get_application_repository
    from recruitdesk.utils.constants import ApplicationStatus

    _guard(Permission.APPLICATIONS_VIEW)
    _require_db()

    repo = get_application_repository()
    if status:
        try:
            applications = repo.get_by_status(ApplicationStatus(status.lower()), limit=limit)
        except ValueError:
            console.print(f"[red]Invalid status: {status}[/red]")
            raise typer.Exit(1)
    else:
        applications = repo.find({}, limit=limit, sort_by="submitted_at")

    if not applications:
        console.print("[yellow]No applications found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Applications ({len(applications)} shown)")
    table.add_column("ID", style="dim", width=24)
    table.add_column("Applicant", style="cyan")
    table.add_column("Job")
    table.add_column("Source")
    table.add_column("Status", justify="center")

    for application in applications:
        table.add_row(
            application.id,
            _truncate(application.full_name, 30),
            _truncate(application.job_title or application.target_job_id, 30),
            application.source,
            _colored(application.status),
        )
    console.print(table)


@app.command()
def list_categories(
    active_only: bool = typer.Option(False, "--active", help="Only active categories"),
):
    """Show the category hierarchy."""
    from rich.tree import Tree

    from recruitdesk.auth.permissions import Permission
    from recruitdesk.data.repositories import get_category_repository

    _guard(Permission.JOBS_VIEW)
    _require_db()

    nodes = get_category_repository().get_tree(active_only=active_only)
    if not nodes:
        console.print("[yellow]No categories found.[/yellow]")
        raise typer.Exit(0)

    def _add(branch, items):
        for node in items:
            category = node.category
            label = f"[cyan]{category.name}[/cyan] [dim]({category.id})[/dim]"
            if not category.is_active:
                label += " [red]inactive[/red]"
            _add(branch.add(label), node.children)

    root = Tree("[bold]Categories[/bold]")
    _add(root, nodes)
    console.print(root)


@app.command()
def list_tags(
    kind: Optional[str] = typer.Option(None, "--kind", "-k", help="system or custom"),
):
    """List tags."""
    from pymongo import ASCENDING

    from recruitdesk.auth.permissions import Permission
    from recruitdesk.data.repositories import get_tag_repository

    _guard(Permission.JOBS_VIEW)

    if kind not in (None, "system", "custom"):
        console.print(f"[red]Invalid kind: {kind}. Use 'system' or 'custom'.[/red]")
        raise typer.Exit(1)
    _require_db()

    repo = get_tag_repository()
    if kind is None:
        tags = repo.find({}, limit=0, sort_by="name", sort_order=ASCENDING)
    else:
        tags = repo.get_by_type(kind == "system")
    if not tags:
        console.print("[yellow]No tags found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Tags ({len(tags)})")
    table.add_column("ID", style="dim", width=24)
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Description")

    for tag in tags:
        table.add_row(tag.id, tag.name, "system" if tag.is_system else "custom", _truncate(tag.description, 50))
    console.print(table)


# =============================================================================
# Statistics
# =============================================================================


@app.command()
def client_stats(client_id: str = typer.Argument(..., help="Client ID")):
    """Show statistics for one client."""
    from recruitdesk.auth.permissions import Permission
    from recruitdesk.core.exceptions import RecruitDeskError
    from recruitdesk.services import StatisticsService

    user = _guard(Permission.ANALYTICS_VIEW)
    _require_db()

    try:
        stats = StatisticsService().client_statistics(user, client_id)
    except RecruitDeskError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Client {client_id}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    for name, value in stats.model_dump().items():
        table.add_row(name.replace("_", " ").title(), "-" if value is None else str(value))
    console.print(table)


@app.command()
def job_stats(job_id: str = typer.Argument(..., help="Job ID")):
    """Show statistics for one job."""
    from recruitdesk.auth.permissions import Permission
    from recruitdesk.core.exceptions import RecruitDeskError
    from recruitdesk.services import StatisticsService

    user = _guard(Permission.ANALYTICS_VIEW)
    _require_db()

    try:
        stats = StatisticsService().job_statistics(user, job_id)
    except RecruitDeskError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Job {job_id}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    for name, value in stats.model_dump().items():
        table.add_row(name.replace("_", " ").title(), "-" if value is None else str(value))
    console.print(table)


@app.command()
def overview(
    refresh: bool = typer.Option(False, "--refresh", help="Also write statistics back to clients and jobs"),
):
    """Show dashboard headline numbers."""
    from recruitdesk.auth.permissions import Permission
    from recruitdesk.core.exceptions import PermissionDeniedError
    from recruitdesk.services import StatisticsService

    user = _guard(Permission.ANALYTICS_VIEW)
    _require_db()

    service = StatisticsService()
    numbers = service.overview(user)
    applications = service.application_stats(user)

    table = Table(title="Dashboard Overview")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Open Jobs", f"{numbers.open_jobs} / {numbers.total_jobs}")
    table.add_row("Active Candidates", f"{numbers.active_candidates} / {numbers.total_candidates}")
    table.add_row("Active Clients", f"{numbers.active_clients} / {numbers.total_clients}")
    table.add_row("Pending Applications", str(numbers.pending_applications))
    table.add_row("Approval Rate", f"{applications.approval_rate}%")
    console.print(table)

    if applications.top_sources:
        console.print("\n[bold]Top Sources:[/bold]")
        for source in applications.top_sources:
            console.print(f"  {source.source}: {source.count}")

    if refresh:
        try:
            updated = service.refresh_all(user)
        except PermissionDeniedError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
        console.print(f"\n[green]Statistics written to {updated['clients']} clients and {updated['jobs']} jobs.[/green]")


@app.command()
def validate_relationships():
    """Report client/job/candidate links that are missing a side."""
    from recruitdesk.auth.permissions import Permission
    from recruitdesk.services import RelationshipService

    user = _guard(Permission.ANALYTICS_VIEW)
    _require_db()

    report = RelationshipService().validate(user)
    if report.valid:
        console.print("[green]All relationships are consistent.[/green]")
        return

    console.print(f"[yellow]Found {len(report.errors)} problem(s):[/yellow]")
    for error in report.errors:
        console.print(f"  [red]✗[/red] {error}")
    raise typer.Exit(1)


# =============================================================================
# Workflow
# =============================================================================


@app.command()
def approve_application(
    application_id: str = typer.Argument(..., help="Application ID"),
    job_id: Optional[str] = typer.Option(None, "--job", "-j", help="Assign to this job instead of the targeted one"),
):
    """Approve an application and create its candidate."""
    from recruitdesk.auth.permissions import Permission
    from recruitdesk.core.exceptions import RecruitDeskError
    from recruitdesk.services import ApplicationService

    user = _guard(Permission.APPLICATIONS_APPROVE)
    _require_db()

    try:
        application, candidate = ApplicationService().approve(user, application_id, assigned_job_id=job_id)
    except RecruitDeskError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Application {application.id} approved[/green]")
    console.print(f"  Candidate: [cyan]{candidate.full_name}[/cyan] ({candidate.id})")
    console.print(f"  Job: {application.assigned_job_id}")


@app.command()
def reject_application(
    application_id: str = typer.Argument(..., help="Application ID"),
    reason: Optional[str] = typer.Option(None, "--reason", "-r", help="Rejection reason"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Internal review notes"),
):
    """Reject an application."""
    from recruitdesk.auth.permissions import Permission
    from recruitdesk.core.exceptions import RecruitDeskError
    from recruitdesk.services import ApplicationService

    user = _guard(Permission.APPLICATIONS_REJECT)
    _require_db()

    try:
        application = ApplicationService().reject(user, application_id, reason=reason, notes=notes)
    except RecruitDeskError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Application {application.id} rejected[/green]")


@app.command()
def move_candidate(
    candidate_id: str = typer.Argument(..., help="Candidate ID"),
    stage_id: str = typer.Argument(..., help="Target pipeline stage"),
    job_id: Optional[str] = typer.Option(None, "--job", "-j", help="Job (defaults to the selected job)"),
):
    """Move a candidate to a pipeline stage."""
    from recruitdesk.auth.permissions import Permission
    from recruitdesk.core.exceptions import RecruitDeskError
    from recruitdesk.services import PipelineService

    user = _guard(Permission.CANDIDATES_EDIT)
    job_id = job_id or _session_store().selected_job_id
    if not job_id:
        console.print("[red]No job given and no job selected. Use --job or 'select-job'.[/red]")
        raise typer.Exit(1)
    _require_db()

    try:
        candidate = PipelineService().move_candidate(user, candidate_id, job_id, stage_id)
    except RecruitDeskError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(
        f"[green]✓ {candidate.full_name} moved to '{stage_id}'[/green] "
        f"(status {_colored(candidate.status_for_job(job_id) or 'new')})"
    )


@app.command()
def score_application(
    application_id: str = typer.Argument(..., help="Application ID"),
    job_id: Optional[str] = typer.Option(None, "--job", "-j", help="Score against this job"),
):
    """Show the resume score of an application."""
    from recruitdesk.auth.permissions import Permission
    from recruitdesk.core.exceptions import RecruitDeskError
    from recruitdesk.services import ApplicationService

    user = _guard(Permission.APPLICATIONS_VIEW)
    _require_db()

    try:
        score = ApplicationService().score(user, application_id, job_id=job_id)
    except RecruitDeskError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Resume Score: {score.overall}/100")
    table.add_column("Component", style="cyan")
    table.add_column("Score", justify="right", style="green")
    table.add_row("Skills", str(score.skills))
    table.add_row("Experience", str(score.experience))
    table.add_row("Education", str(score.education))
    table.add_row("Relevance", str(score.relevance))
    console.print(table)

    if score.details.matched_skills:
        console.print(f"[green]Matched:[/green] {', '.join(score.details.matched_skills)}")
    if score.details.missing_skills:
        console.print(f"[yellow]Missing:[/yellow] {', '.join(score.details.missing_skills)}")
    for recommendation in score.details.recommendations:
        console.print(f"  [dim]{recommendation}[/dim]")


# =============================================================================
# Live Sync
# =============================================================================


@app.command()
def watch(
    duration: Optional[float] = typer.Option(None, "--duration", "-d", help="Stop after this many seconds"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="change_stream or poll"),
):
    """Print live collection counts as the database changes."""
    from recruitdesk.auth.permissions import Permission
    from recruitdesk.sync import DashboardState, RealtimeSync, bind_realtime

    _guard(Permission.ANALYTICS_VIEW)
    _require_db()

    state = DashboardState(session=_session_store())

    def _print_counts(collection: str) -> None:
        console.print(f"[cyan]{collection}[/cyan]: {len(state.snapshot(collection))} documents")

    state.add_listener(_print_counts)

    async def _run() -> None:
        async with RealtimeSync(mode=mode) as sync:
            bind_realtime(sync, state)
            if duration is None:
                await asyncio.Event().wait()
            else:
                await asyncio.sleep(duration)

    console.print("[yellow]Watching for changes (Ctrl+C to stop)...[/yellow]")
    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass
    console.print("[green]Stopped watching.[/green]")


# =============================================================================
# Email Templates
# =============================================================================


@app.command()
def templates(
    type: Optional[str] = typer.Option(None, "--type", "-t", help="Filter by template type"),
    active_only: bool = typer.Option(False, "--active", help="Only active templates"),
):
    """List email templates from the REST backend."""
    import httpx

    from recruitdesk.api import ApiClient, EmailTemplatesApi
    from recruitdesk.auth.permissions import FEATURE_PERMISSIONS
    from recruitdesk.core.exceptions import ApiError

    _guard(FEATURE_PERMISSIONS["messages"])

    async def _fetch():
        async with ApiClient(session=_session_store()) as client:
            return await EmailTemplatesApi(client).list(type=type, is_active=True if active_only else None)

    try:
        items = asyncio.run(_fetch())
    except (ApiError, httpx.HTTPError) as e:
        console.print(f"[red]Failed to fetch email templates: {e}[/red]")
        raise typer.Exit(1)

    if not items:
        console.print("[yellow]No templates found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Email Templates ({len(items)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Default", justify="center")
    table.add_column("Variables")

    for template in items:
        table.add_row(
            template.id or "",
            _truncate(template.name, 40),
            template.type,
            "✓" if template.is_default else "",
            ", ".join(template.variables),
        )
    console.print(table)


@app.command()
def render_email(
    template_id: str = typer.Argument(..., help="Email template ID"),
    candidate_id: str = typer.Option(..., "--candidate", "-c", help="Candidate ID"),
    job_id: Optional[str] = typer.Option(None, "--job", "-j", help="Job ID"),
):
    """Preview an email template filled in for a candidate."""
    import httpx

    from recruitdesk.api import ApiClient, EmailTemplatesApi
    from recruitdesk.auth.permissions import FEATURE_PERMISSIONS
    from recruitdesk.core.email_templates import apply_email_template, extract_email_variables
    from recruitdesk.core.exceptions import ApiError
    from recruitdesk.data.repositories import (
        get_candidate_repository,
        get_client_repository,
        get_job_repository,
    )

    _guard(FEATURE_PERMISSIONS["messages"])
    _require_db()

    candidate = get_candidate_repository().get_by_id(candidate_id)
    if candidate is None:
        console.print(f"[red]Candidate not found: {candidate_id}[/red]")
        raise typer.Exit(1)
    job = get_job_repository().get_by_id(job_id) if job_id else None
    client = get_client_repository().get_by_id(job.client_id) if job and job.client_id else None

    async def _fetch():
        async with ApiClient(session=_session_store()) as api:
            return await EmailTemplatesApi(api).get(template_id)

    try:
        template = asyncio.run(_fetch())
    except (ApiError, httpx.HTTPError) as e:
        console.print(f"[red]Failed to fetch template: {e}[/red]")
        raise typer.Exit(1)

    subject, body = apply_email_template(
        template.subject,
        template.body,
        extract_email_variables(candidate, job, client),
    )
    console.print(f"[bold]Subject:[/bold] {subject}")
    console.print(f"[dim]{'─' * 50}[/dim]")
    console.print(body)


if __name__ == "__main__":
    app()
