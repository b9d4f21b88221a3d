"""Typer CLI root application with serve command."""

import typer

from ward_registry.core.config import get_settings
from ward_registry.core.logging import setup_logging

app = typer.Typer(name="ward-registry", help="Ward registry reporting and print-batch CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run(
        "ward_registry.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@app.command()
def token(
    username: str = typer.Argument(..., help="Username to put in the token subject"),
    role: str = typer.Option("viewer", "--role", help="Role claim"),
    expires_minutes: int = typer.Option(30, "--expires", help="Lifetime in minutes"),
) -> None:
    """Mint an access token signed with the configured secret (for local testing)."""
    from ward_registry.core.security import create_access_token

    settings = get_settings()
    typer.echo(
        create_access_token(
            username,
            role,
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expires_minutes=expires_minutes,
        )
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from ward_registry.cli.db_cmd import db_app
    from ward_registry.cli.stats_cmd import stats_app

    app.add_typer(db_app, name="db", help="Database migration commands")
    app.add_typer(stats_app, name="stats", help="Print statistics commands")


_register_subcommands()
