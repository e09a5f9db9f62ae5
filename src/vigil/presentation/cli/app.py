"""Vigil CLI application using Typer.

Operator utilities: secret generation, schema setup, role seeding and
emergency account unlocks.
"""

import asyncio
import secrets
from datetime import timedelta

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from vigil_auth import LockoutGuard
from vigil_config.settings import get_settings
from vigil_identity.application.commands import (
    ForceUnlockCommand,
    SeedSystemRolesCommand,
)
from vigil_identity.domain.account import AccountNotFoundError, Role
from vigil_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    RoleRepositorySQLAlchemy,
    SecurityEventRepositorySQLAlchemy,
    build_engine,
    create_tables,
)

app = typer.Typer(
    name="vigil",
    help="Vigil - account security service CLI",
    no_args_is_help=True,
)
console = Console()


# Create secrets subcommand group
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Vigil configuration.

    Generates:
    - JWT_SECRET_KEY: Secret for signing JWT authentication tokens
    - POSTGRES_PASSWORD: Database password
    - SUPERADMIN_PASSWORD: Password of the bootstrap super administrator

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Vigil Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes of entropy for HS256
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={secrets.token_urlsafe(64)}")
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={secrets.token_urlsafe(32)}")
    console.print(f"[cyan]SUPERADMIN_PASSWORD[/cyan]={secrets.token_urlsafe(24)}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


def _session_maker() -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    engine = build_engine(get_settings().database_url)
    return engine, async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def _seed_roles() -> list[Role]:
    engine, session_maker = _session_maker()
    try:
        async with session_maker() as session:
            created = await SeedSystemRolesCommand(
                RoleRepositorySQLAlchemy(session),
            ).execute()
            await session.commit()
        return created
    finally:
        await engine.dispose()


def _print_roles(roles: list[Role]) -> None:
    table = Table(title="Seeded roles")
    table.add_column("Name", style="cyan")
    table.add_column("Level", justify="right")
    table.add_column("Description")
    for role in roles:
        table.add_row(role.name, str(role.level), role.description)
    console.print(table)


@app.command("init-db")
def init_db() -> None:
    """Create missing tables and seed the system roles."""

    async def _run() -> list[Role]:
        engine = build_engine(get_settings().database_url)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()
        return await _seed_roles()

    created = asyncio.run(_run())
    console.print("[green]Database schema is up to date.[/green]")
    if created:
        _print_roles(created)


@app.command("seed-roles")
def seed_roles() -> None:
    """Create the built-in user, admin and super_admin roles if missing."""
    created = asyncio.run(_seed_roles())
    if created:
        _print_roles(created)
    else:
        console.print("[dim]All system roles already exist.[/dim]")


@app.command("unlock")
def unlock(
    email: str = typer.Argument(..., help="Email of the locked account"),
) -> None:
    """Clear an account's lockout and failed-login counter."""
    settings = get_settings()

    async def _run() -> None:
        engine, session_maker = _session_maker()
        try:
            async with session_maker() as session:
                accounts = AccountRepositorySQLAlchemy(session)
                account = await accounts.find_by_email(email)
                if account is None:
                    raise AccountNotFoundError(email)
                await ForceUnlockCommand(
                    account_repository=accounts,
                    event_repository=SecurityEventRepositorySQLAlchemy(session),
                    lockout_guard=LockoutGuard(
                        threshold=settings.lockout_threshold,
                        lockout_duration=timedelta(
                            minutes=settings.lockout_duration_minutes,
                        ),
                    ),
                ).execute(account.id, performed_by="cli")
                await session.commit()
        finally:
            await engine.dispose()

    try:
        asyncio.run(_run())
    except AccountNotFoundError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[green]Unlocked {email}[/green]")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "vigil.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
