"""User management CLI commands."""

import typer
from rich.panel import Panel
from rich.table import Table

from src.user_service.core.exceptions import ConflictError, UserServiceError
from src.user_service.core.services import UserService
from src.user_service.entities.core.user import (
    Gender,
    UserCreate,
    UserResponse,
    UserStatus,
)

from .utils import console, user_service_scope

users_app = typer.Typer(help="👥 User management commands")

SAMPLE_USERS: list[tuple[UserCreate, UserStatus]] = [
    (
        UserCreate(
            login="john_doe",
            first_name="John",
            last_name="Doe",
            middle_name="Michael",
            gender=Gender.MALE,
            age=30,
            phone="+1234567890",
            email="john.doe@example.com",
            avatar="https://example.com/avatars/john.jpg",
        ),
        UserStatus.ACTIVE,
    ),
    (
        UserCreate(
            login="jane_smith",
            first_name="Jane",
            last_name="Smith",
            gender=Gender.FEMALE,
            age=25,
            phone="+0987654321",
            email="jane.smith@example.com",
            avatar="https://example.com/avatars/jane.jpg",
        ),
        UserStatus.ACTIVE,
    ),
    (
        UserCreate(
            login="alex_johnson",
            first_name="Alex",
            last_name="Johnson",
            middle_name="Robert",
            gender=Gender.MALE,
            age=28,
            phone="+1122334455",
            email="alex.johnson@example.com",
        ),
        UserStatus.ACTIVE,
    ),
    (
        UserCreate(
            login="maria_garcia",
            first_name="Maria",
            last_name="Garcia",
            gender=Gender.FEMALE,
            age=35,
            phone="+1555666777",
            email="maria.garcia@example.com",
            avatar="https://example.com/avatars/maria.jpg",
        ),
        UserStatus.INACTIVE,
    ),
    (
        UserCreate(
            login="david_wilson",
            first_name="David",
            last_name="Wilson",
            gender=Gender.MALE,
            age=42,
            phone="+1888999000",
            email="david.wilson@example.com",
        ),
        UserStatus.SUSPENDED,
    ),
]


def seed_users(service: UserService) -> list[UserResponse]:
    """Create the sample users, skipping any whose email or login is taken."""
    created = []
    for data, status in SAMPLE_USERS:
        try:
            user = service.create(data)
        except ConflictError as exc:
            console.print(f"[dim]Skipped {data.login}: {exc.message}[/dim]")
            continue
        if status != UserStatus.ACTIVE:
            user = service.update_status(user.id, status)
        console.print(f"[green]Created user: {user.full_name}[/green]")
        created.append(user)
    return created


@users_app.command("seed")
def seed() -> None:
    """🌱 Insert the sample users."""
    with user_service_scope() as service:
        created = seed_users(service)
    console.print(f"\n[bold]User seeding completed![/bold] {len(created)} created")


@users_app.command("list")
def list_users() -> None:
    """📋 List all users, newest first."""
    with user_service_scope() as service:
        users = service.find_all()

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Login", style="cyan")
    table.add_column("Name", style="blue")
    table.add_column("Email", style="green")
    table.add_column("Age", justify="right")
    table.add_column("Status", style="yellow")

    for user in users:
        table.add_row(
            user.id,
            user.login,
            user.full_name,
            user.email,
            str(user.age),
            user.status.value,
        )

    console.print(table)
    console.print(f"\n[dim]Showing {len(users)} users[/dim]")


@users_app.command("set-status")
def set_status(
    user_id: str = typer.Argument(..., help="ID of the user"),
    status: UserStatus = typer.Argument(..., help="New status"),
) -> None:
    """🔁 Change a user's status."""
    try:
        with user_service_scope() as service:
            user = service.update_status(user_id, status)
    except UserServiceError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(1) from None

    console.print(
        Panel.fit(
            f"[bold]{user.full_name}[/bold] ({user.login}) is now "
            f"[yellow]{user.status.value}[/yellow]",
            border_style="green",
        )
    )


@users_app.command("delete")
def delete_user(
    user_id: str = typer.Argument(..., help="ID of the user to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """🗑️ Permanently delete a user."""
    if not yes:
        typer.confirm(f"Delete user {user_id}?", abort=True)

    try:
        with user_service_scope() as service:
            service.delete(user_id)
    except UserServiceError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(1) from None

    console.print(f"[green]✅ User {user_id} deleted[/green]")
