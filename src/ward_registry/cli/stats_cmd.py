"""Print statistics CLI commands."""

import asyncio

import typer

stats_app = typer.Typer()


@stats_app.command("show")
def stats_show(
    municipality: str | None = typer.Option(None, "--municipality", help="Municipality substring filter"),
    barangay: str | None = typer.Option(None, "--barangay", help="Barangay substring filter"),
) -> None:
    """Show printed / not-printed counts for every entity class."""
    asyncio.run(_stats_show(municipality, barangay))


async def _stats_show(municipality: str | None, barangay: str | None) -> None:
    """Async implementation of stats show."""
    from ward_registry.core.config import get_settings
    from ward_registry.core.database import dispose_engine, get_session_factory, init_engine
    from ward_registry.services.statistics_service import get_print_statistics

    settings = get_settings()
    init_engine(settings.database_url)

    try:
        factory = get_session_factory()
        async with factory() as session:
            stats = await get_print_statistics(
                session, election_year=settings.election_year, municipality=municipality, barangay=barangay
            )
    finally:
        await dispose_engine()

    typer.echo(f"Print statistics (election year {settings.election_year}):")
    typer.echo(f"  {'':<14}{'printed':>10}{'pending':>10}{'total':>10}")
    for label, counts in (
        ("Households", stats.households),
        ("Ward leaders", stats.ward_leaders),
        ("Coordinators", stats.coordinators),
    ):
        typer.echo(f"  {label:<14}{counts.printed:>10}{counts.not_printed:>10}{counts.total:>10}")


@stats_app.command("by-barangay")
def stats_by_barangay(
    municipality: str | None = typer.Option(None, "--municipality", help="Exact municipality"),
) -> None:
    """Show per-barangay printed percentages."""
    asyncio.run(_stats_by_barangay(municipality))


async def _stats_by_barangay(municipality: str | None) -> None:
    """Async implementation of stats by-barangay."""
    from ward_registry.core.config import get_settings
    from ward_registry.core.database import dispose_engine, get_session_factory, init_engine
    from ward_registry.services.statistics_service import get_print_statistics_by_barangay

    settings = get_settings()
    init_engine(settings.database_url)

    try:
        factory = get_session_factory()
        async with factory() as session:
            rows = await get_print_statistics_by_barangay(
                session, election_year=settings.election_year, municipality=municipality
            )
    finally:
        await dispose_engine()

    if not rows:
        typer.echo("No data.")
        return
    typer.echo(f"  {'Barangay':<24}{'HH %':>8}{'WL %':>8}{'BC %':>8}")
    for row in rows:
        typer.echo(
            f"  {row.barangay or '(none)':<24}"
            f"{row.households.percentage:>8}"
            f"{row.ward_leaders.percentage:>8}"
            f"{row.coordinators.percentage:>8}"
        )
