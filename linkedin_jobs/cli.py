from __future__ import annotations

import asyncio
import json
from pathlib import Path

import click

from linkedin_jobs.config.searches import load_searches
from linkedin_jobs.logging_config import configure_logging
from linkedin_jobs.models.job import JobRecord
from linkedin_jobs.services.query_service import run_query, run_searches


def _echo_jobs(jobs: list[JobRecord], output_format: str) -> None:
    if output_format == "json":
        click.echo(json.dumps([job.to_dict() for job in jobs], indent=2, ensure_ascii=False))
        return
    if not jobs:
        click.echo("No jobs found")
        return
    for job in jobs:
        click.echo(f"{job.company}\t{job.position}\t{job.location}\t{job.ago_time}\t{job.job_url}")


@click.group()
@click.option("--log-level", type=str, default=None, help="Override LOG_LEVEL.")
@click.option(
    "--log-format",
    type=click.Choice(["json", "console"]),
    default=None,
    help="Override LOG_FORMAT.",
)
def cli(log_level: str | None, log_format: str | None) -> None:
    """LinkedIn guest job search CLI."""
    configure_logging(log_level, log_format)


@cli.command()
@click.option("--keyword", type=str, default="")
@click.option("--location", type=str, default="")
@click.option("--date-since-posted", type=str, default="", help='"past month", "past week" or "24hr".')
@click.option("--job-type", type=str, default="", help='e.g. "full time", "contract".')
@click.option("--remote-filter", type=str, default="", help='"on-site", "remote" or "hybrid".')
@click.option("--salary", type=str, default="", help="40000, 60000, 80000, 100000 or 120000.")
@click.option("--experience-level", type=str, default="", help='e.g. "entry level", "senior".')
@click.option("--sort-by", type=str, default="", help='"recent" or "relevant".')
@click.option("--limit", type=int, default=25, show_default=True, help="0 fetches every page.")
@click.option("--page", type=int, default=0, show_default=True)
@click.option("--host", type=str, default=None)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
)
def search(output_format: str, **options: object) -> None:
    """Run one search and print the jobs found."""
    run = asyncio.run(run_query(options))
    _echo_jobs(run.records, output_format)
    click.echo(str(run), err=True)


@cli.command("run-searches")
@click.argument(
    "searches_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--search", "search_name", type=str, default=None, help="Only run the search with this name.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
)
def run_saved_searches(searches_path: Path, search_name: str | None, output_format: str) -> None:
    """Run the saved searches listed in a YAML file."""
    searches = load_searches(searches_path)
    if search_name:
        searches = [s for s in searches if s.get("name") == search_name]
    if not searches:
        raise click.ClickException(f"No searches to run in {searches_path}")

    results = asyncio.run(run_searches(searches))
    for name, run in results:
        click.echo(f"== {name}: {run}", err=True)
        _echo_jobs(run.records, output_format)


if __name__ == "__main__":
    cli()
