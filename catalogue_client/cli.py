"""Командная строка каталога: список с фильтрами, форма создания/редактирования, удаление."""

import json
import logging
from typing import List, Optional

import click
import httpx

from .api import VideoGameApi
from .forms import FormError, build_game, missing_fields
from .listing import DEFAULT_SORT, SORT_OPTIONS, apply_filters, distinct_genres, distinct_platforms
from .models import VideoGame

logger = logging.getLogger(__name__)


def _load_games(api: VideoGameApi) -> List[VideoGame]:
    try:
        return api.list_games()
    except httpx.HTTPError as exc:
        logger.error("Failed to load games: %s", exc)
        raise click.ClickException("Failed to load games")


def _echo_games(games: List[VideoGame]) -> None:
    if not games:
        click.echo("No games found with the provided filters.")
        return

    click.echo(f"Showing {len(games)} game(s):")
    for game in games:
        click.echo(
            f"- [{game.id}] {game.title} | {game.publisher} | genre={game.genre} "
            f"| platform={game.platform} | released={game.release_date.isoformat()} | ${game.price:.2f}"
        )


@click.group()
@click.option(
    "--api-url",
    envvar="CATALOGUE_API_URL",
    default="http://localhost:8000",
    show_default=True,
    help="Base URL of the catalogue API.",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, api_url: str, verbose: bool) -> None:
    """Video game catalogue client."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # В тестах клиент API передаётся готовым через obj=...
    if ctx.obj is None:
        ctx.obj = VideoGameApi(base_url=api_url)
        ctx.call_on_close(ctx.obj.close)


@cli.command("list")
@click.option("--search", default="", help="Substring to look for in title or publisher.")
@click.option("--genre", default=None, help="Show only games of this genre.")
@click.option("--platform", default=None, help="Show only games for this platform.")
@click.option(
    "--sort",
    "sort_by",
    type=click.Choice(list(SORT_OPTIONS)),
    default=DEFAULT_SORT,
    show_default=True,
    help="Sort order.",
)
@click.option("--json-output", is_flag=True, help="Output the results as JSON.")
@click.pass_obj
def list_command(
    api: VideoGameApi,
    search: str,
    genre: Optional[str],
    platform: Optional[str],
    sort_by: str,
    json_output: bool,
) -> None:
    """Show the catalogue, filtered and sorted locally."""
    games = _load_games(api)
    shown = apply_filters(games, search=search, genre=genre, platform=platform, sort_by=sort_by)

    if json_output:
        click.echo(json.dumps([g.to_json() for g in shown], indent=2))
        return

    click.echo(f"Genres: {', '.join(distinct_genres(games)) or '-'}")
    click.echo(f"Platforms: {', '.join(distinct_platforms(games)) or '-'}")
    _echo_games(shown)


@cli.command("edit")
@click.argument("game_id", default="new")
@click.option("--title", default=None)
@click.option("--publisher", default=None)
@click.option("--genre", default=None)
@click.option("--platform", default=None)
@click.option("--release-date", default=None, help="Release date as YYYY-MM-DD.")
@click.option("--price", default=None)
@click.pass_obj
def edit_command(api: VideoGameApi, game_id: str, **fields) -> None:
    """Create a game (GAME_ID 'new') or edit an existing one.

    Fields not given as options are taken from the stored game or prompted for.
    """
    is_new = not game_id or game_id == "new"
    values = {}
    record_id = 0

    if not is_new:
        try:
            record_id = int(game_id)
        except ValueError:
            raise click.BadParameter("must be an integer id or 'new'", param_hint="GAME_ID")
        try:
            values = api.get_game(record_id).as_form()
        except httpx.HTTPError as exc:
            logger.error("Failed to load game %s: %s", record_id, exc)
            raise click.ClickException("Failed to load game")

    values.update({name: value for name, value in fields.items() if value is not None})
    for name in missing_fields(values):
        values[name] = click.prompt(name.replace("_", " ").capitalize())

    try:
        game = build_game(values, game_id=record_id)
    except FormError as exc:
        raise click.ClickException(f"Invalid game: {exc}")

    action = "create" if is_new else "update"
    try:
        if is_new:
            game = api.create_game(game)
        else:
            api.update_game(record_id, game)
    except httpx.HTTPError as exc:
        logger.error("Failed to %s game: %s", action, exc)
        raise click.ClickException(f"Failed to {action} game")

    click.echo(f"{action.capitalize()}d game {game.id}: {game.title}")
    _echo_games(apply_filters(_load_games(api)))


@cli.command("delete")
@click.argument("game_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def delete_command(api: VideoGameApi, game_id: int, yes: bool) -> None:
    """Delete a game after confirmation, then show the refreshed list."""
    if not yes and not click.confirm("Are you sure you want to delete this game?"):
        click.echo("Cancelled.")
        return

    try:
        api.delete_game(game_id)
    except httpx.HTTPError as exc:
        logger.error("Failed to delete game %s: %s", game_id, exc)
        raise click.ClickException("Failed to delete game")

    click.echo(f"Deleted game {game_id}.")
    _echo_games(apply_filters(_load_games(api)))


def main() -> None:
    cli(prog_name="catalogue")
