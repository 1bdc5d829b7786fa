"""Command-line entry point: article cache administration and the server launcher.

Invariants:
    - fill-cache builds both tiers completely before writing any slot
    - Exit status 1 on any WikiTrainsError (nothing partial is persisted)

Design Decisions:
    - click group: fill-cache and cache-status administer the cache, serve runs the API
    - Cache commands run outside the API process: filling and gameplay are not expected
      to overlap
"""

import asyncio
import logging
import sys

import click
import uvicorn

from wikitrains.config import get_settings
from wikitrains.core.domain_types import Tier
from wikitrains.core.errors import WikiTrainsError
from wikitrains.infrastructure.article_cache import ArticleCache
from wikitrains.infrastructure.database import init_db
from wikitrains.infrastructure.observability import setup_logging
from wikitrains.services.game_services import (
    assemble_services,
    build_wikipedia_client,
)

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """WikiTrains administration."""
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level, "text")


@cli.command("fill-cache")
@click.option("--tier-one", type=int, default=None, help="Tier one pool size (default: settings)")
@click.option("--tier-two", type=int, default=None, help="Tier two pool size (default: settings)")
def fill_cache(tier_one: int | None, tier_two: int | None) -> None:
    """Fetch, classify and store fresh article pools."""
    settings = get_settings()
    tier_one = tier_one if tier_one is not None else settings.tier_one_size
    tier_two = tier_two if tier_two is not None else settings.tier_two_size
    if tier_one < settings.end_candidates or tier_two < 1:
        raise click.BadParameter(
            f"tier one needs at least {settings.end_candidates} articles, tier two at least 1",
        )
    try:
        counts = asyncio.run(_fill(tier_one, tier_two))
    except WikiTrainsError as exc:
        click.echo(f"Cache fill failed: {exc.message}", err=True)
        sys.exit(1)
    click.echo(
        f"Cached {counts[Tier.ONE]} tier one and {counts[Tier.TWO]} tier two articles",
    )


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=8000, show_default=True)
@click.option("--reload", is_flag=True, help="Restart on code changes (development)")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the game server (HTTP + WebSocket) under uvicorn."""
    uvicorn.run("wikitrains.main:app", host=host, port=port, reload=reload)


@cli.command("cache-status")
def cache_status() -> None:
    """Show how many articles each tier holds."""
    counts = asyncio.run(_counts())
    for tier, count in counts.items():
        click.echo(f"{tier.value}: {count}")


async def _fill(tier_one: int, tier_two: int) -> dict[Tier, int]:
    settings = get_settings()
    db = init_db(settings.database_url)
    source = build_wikipedia_client(settings)
    try:
        await db.create_schema()
        services = assemble_services(settings, source, ArticleCache(db))
        return await services.pool_builder.fill_cache(
            services.cache,
            tier_one,
            tier_two,
            settings.tier_one_min_views,
            settings.tier_two_min_views,
        )
    finally:
        await source.aclose()
        await db.dispose()


async def _counts() -> dict[Tier, int]:
    settings = get_settings()
    db = init_db(settings.database_url)
    try:
        await db.create_schema()
        cache = ArticleCache(db)
        return {tier: await cache.count(tier) for tier in Tier}
    finally:
        await db.dispose()


if __name__ == "__main__":
    cli()
