# streamBox/cli.py
"""Command-line front end for StreamBox."""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.console import Console
from rich.progress import Progress
from rich.table import Table
from typing_extensions import Annotated

from streamBox import controller
from streamBox.api_clients import ApiError
from streamBox.core.models import Movie, MoviePage
from streamBox.gui import FavoritesWorker, RatedMoviesWorker
from streamBox.storage import StorageError, favorites_storage, ratings_storage
from streamBox.utils import open_url_host_browser
from streamBox.validation import ValidationError, password_strength, strength_label

# --- CLI application setup ---
app = typer.Typer(
    name="streambox",
    help="Browse TMDb movies and keep local favorites and ratings.",
    add_completion=False,
    rich_markup_mode="rich",
)
favorites_app = typer.Typer(name="favorites", help="Manage favorite movies.")
ratings_app   = typer.Typer(name="ratings", help="Manage your 1–5 star ratings.")
profile_app   = typer.Typer(name="profile", help="Show or edit your profile.", invoke_without_command=True)
app.add_typer(favorites_app, no_args_is_help=True)
app.add_typer(ratings_app, no_args_is_help=True)
app.add_typer(profile_app)

console = Console()


def _fail(exc: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {exc}")
    raise typer.Exit(code=1)


def _require_session() -> None:
    if not controller.is_signed_in():
        console.print("[yellow]Not signed in. Run [bold]streambox login[/bold] first.[/yellow]")
        raise typer.Exit(code=1)


def _movie_table(title: str, movies: List[Movie]) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Year", justify="center")
    table.add_column("Score", justify="right")
    table.add_column("Votes", justify="right")
    for m in movies:
        table.add_row(
            str(m.id),
            m.title,
            str(m.release_year or "–"),
            f"{m.vote_average:.1f}",
            str(m.vote_count),
        )
    return table


def _print_page(title: str, page: MoviePage) -> None:
    console.print(_movie_table(title, page.results))
    console.print(f"[dim]Page {page.page} of {page.total_pages} ({page.total_results} movies)[/dim]")


def _run_with_progress(worker, description: str):
    """Run a load worker on this thread, mirroring its signals to a progress bar."""
    result: dict = {}
    with Progress(console=console, transient=True) as progress:
        task = progress.add_task(description, total=None)
        worker.progress.connect(lambda done, total: progress.update(task, completed=done, total=total or None))
        worker.message.connect(lambda label: progress.update(task, description=f"{description} {label}"))
        worker.loaded.connect(lambda value: result.setdefault("value", value))
        worker.finished.connect(lambda ok: result.setdefault("ok", ok))
        worker.run()
    if not result.get("ok"):
        _fail(RuntimeError("Loading failed; see the debug log for details."))
    return result["value"]

# --- Session ---
@app.command(help="Sign in with a local account or a remote (DummyJSON) account.")
def login(
    username: Annotated[str, typer.Option(prompt=True)],
    password: Annotated[str, typer.Option(prompt=True, hide_input=True)],
) -> None:
    try:
        user = controller.sign_in(username, password)
    except (ValidationError, ApiError, StorageError) as exc:
        _fail(exc)
    console.print(f"[green]Welcome back, {user.first_name or user.username}![/green]")


@app.command(help="Create a local account and sign in.")
def register(
    username: Annotated[str, typer.Option(prompt=True)],
    email: Annotated[str, typer.Option(prompt=True)],
    password: Annotated[str, typer.Option(prompt=True, hide_input=True)],
    confirm: Annotated[str, typer.Option(prompt="Confirm password", hide_input=True)],
) -> None:
    console.print(f"[dim]Password strength: {strength_label(password_strength(password))}[/dim]")
    try:
        user = controller.sign_up(username, email, password, confirm)
    except (ValidationError, StorageError) as exc:
        _fail(exc)
    console.print(f"[green]Account created. Signed in as {user.username}.[/green]")


@app.command(help="Sign out and forget the stored session.")
def logout() -> None:
    try:
        controller.sign_out()
    except StorageError as exc:
        _fail(exc)
    console.print("Signed out.")


@app.command(help="Show the signed-in user.")
def whoami() -> None:
    user = controller.current_user()
    if user is None:
        console.print("[yellow]Not signed in.[/yellow]")
        raise typer.Exit(code=1)
    console.print(f"[bold]{user.display_name}[/bold] (@{user.username}) <{user.email}>")


@profile_app.callback()
def profile(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is not None:
        return
    _require_session()
    summary = controller.profile_summary()
    user = summary.user
    table = Table(show_header=False, title="Profile")
    table.add_row("Name", user.display_name if user else "–")
    table.add_row("Username", user.username if user else "–")
    table.add_row("Email", user.email if user else "–")
    table.add_row("Favorites", str(summary.favorites_count))
    table.add_row("Ratings", str(summary.ratings_count))
    console.print(table)


@profile_app.command("edit", help="Update first/last name, email or username.")
def profile_edit(
    first_name: Annotated[Optional[str], typer.Option("--first-name")] = None,
    last_name: Annotated[Optional[str], typer.Option("--last-name")] = None,
    email: Annotated[Optional[str], typer.Option("--email")] = None,
    username: Annotated[Optional[str], typer.Option("--username")] = None,
) -> None:
    _require_session()
    user = controller.current_user()
    if user is None:
        console.print("[yellow]Not signed in. Run [bold]streambox login[/bold] first.[/yellow]")
        raise typer.Exit(code=1)
    try:
        updated = controller.update_profile(
            first_name if first_name is not None else user.first_name,
            last_name if last_name is not None else user.last_name,
            email if email is not None else user.email,
            username,
        )
    except (ValidationError, StorageError) as exc:
        _fail(exc)
    console.print(f"[green]Profile updated for {updated.display_name}.[/green]")

# --- Browsing ---
@app.command(help="This week's trending movies.")
def trending() -> None:
    try:
        _user, movies = controller.load_home()
    except ApiError as exc:
        _fail(exc)
    console.print(_movie_table("Trending this week", movies))


@app.command(help="Catalog listing, narrowed by title, genre id and language.")
def movies(
    query: Annotated[str, typer.Option("--query", "-q", help="Match title, genre or cast.")] = "",
    genre: Annotated[Optional[int], typer.Option("--genre", help="TMDb genre id.")] = None,
    language: Annotated[Optional[str], typer.Option("--language", help="Original language, e.g. en.")] = None,
    page: Annotated[int, typer.Option(min=1)] = 1,
) -> None:
    try:
        all_movies, _trending = controller.load_movies(page)
    except ApiError as exc:
        _fail(exc)
    shown = controller.filter_movies(all_movies, query, genre, language)
    if not shown:
        console.print("No movies match.")
        return
    console.print(_movie_table("Movies", shown))


@app.command(help="Popular movies.")
def popular(page: Annotated[int, typer.Option(min=1)] = 1) -> None:
    try:
        _print_page("Popular", controller.tmdb().get_popular_movies(page))
    except ApiError as exc:
        _fail(exc)


@app.command("top-rated", help="Top rated movies.")
def top_rated(page: Annotated[int, typer.Option(min=1)] = 1) -> None:
    try:
        _print_page("Top rated", controller.tmdb().get_top_rated_movies(page))
    except ApiError as exc:
        _fail(exc)


@app.command(help="Upcoming releases.")
def upcoming(page: Annotated[int, typer.Option(min=1)] = 1) -> None:
    try:
        _print_page("Upcoming", controller.tmdb().get_upcoming_movies(page))
    except ApiError as exc:
        _fail(exc)


@app.command(help="Search movies by title.")
def search(
    query: Annotated[str, typer.Argument()],
    page: Annotated[int, typer.Option(min=1)] = 1,
) -> None:
    try:
        _print_page(f"Results for “{query}”", controller.tmdb().search_movies(query, page))
    except ApiError as exc:
        _fail(exc)


@app.command(help="List movie genres.")
def genres() -> None:
    try:
        items = controller.tmdb().get_genres()
    except ApiError as exc:
        _fail(exc)
    table = Table(title="Genres")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Name")
    for g in items:
        table.add_row(str(g.id), g.name)
    console.print(table)


@app.command(help="Most popular movies of one genre.")
def discover(
    genre_id: Annotated[int, typer.Argument()],
    page: Annotated[int, typer.Option(min=1)] = 1,
) -> None:
    try:
        _print_page(f"Genre {genre_id}", controller.tmdb().discover_by_genre(genre_id, page))
    except ApiError as exc:
        _fail(exc)


@app.command(help="Full details for one movie.")
def show(
    movie_id: Annotated[int, typer.Argument()],
    trailer: Annotated[bool, typer.Option("--trailer", help="Open the trailer in a browser.")] = False,
) -> None:
    try:
        view = controller.movie_details(movie_id)
    except ApiError as exc:
        _fail(exc)
    m = view.movie
    console.print(f"[bold]{m.title}[/bold] ({m.release_year or '–'})")
    if m.genres:
        console.print(", ".join(g.name for g in m.genres), style="cyan")
    console.print(f"TMDb {m.vote_average:.1f}/10 from {m.vote_count} votes"
                  + (f" · {m.runtime} min" if m.runtime else ""))
    if m.overview:
        console.print(m.overview)
    if m.cast:
        console.print("[dim]Cast:[/dim] " + ", ".join(c.name for c in m.cast))
    console.print(f"Favorite: {'★' if view.is_favorite else '☆'}   "
                  f"Your rating: {view.user_rating or '–'}")
    if trailer:
        if m.trailer_url:
            open_url_host_browser(m.trailer_url)
        else:
            console.print("[yellow]No trailer available.[/yellow]")

# --- Favorites ---
@favorites_app.command("list", help="Show favorite movies.")
def favorites_list() -> None:
    movies = _run_with_progress(FavoritesWorker(), "Loading favorites")
    if not movies:
        console.print("No favorites yet.")
        return
    console.print(_movie_table("Favorites", movies))


@favorites_app.command("add")
def favorites_add(movie_id: Annotated[int, typer.Argument()]) -> None:
    try:
        added = favorites_storage.add_favorite(movie_id)
    except StorageError as exc:
        _fail(exc)
    console.print("Added to favorites." if added else "Already a favorite.")


@favorites_app.command("remove")
def favorites_remove(movie_id: Annotated[int, typer.Argument()]) -> None:
    try:
        removed = favorites_storage.remove_favorite(movie_id)
    except StorageError as exc:
        _fail(exc)
    console.print("Removed from favorites." if removed else "Not a favorite.")


@favorites_app.command("toggle")
def favorites_toggle(movie_id: Annotated[int, typer.Argument()]) -> None:
    try:
        now = controller.toggle_favorite(movie_id)
    except StorageError as exc:
        _fail(exc)
    console.print("★ Favorite" if now else "☆ Not a favorite")


@favorites_app.command("clear")
def favorites_clear(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation.")] = False,
) -> None:
    if not yes:
        typer.confirm("Remove all movies from your favorites?", abort=True)
    try:
        controller.clear_favorites()
    except StorageError as exc:
        _fail(exc)
    console.print("Favorites cleared.")

# --- Ratings ---
@ratings_app.command("list", help="Show rated movies.")
def ratings_list(
    query: Annotated[str, typer.Option("--query", "-q", help="Filter by title or genre.")] = "",
    sort_by: Annotated[str, typer.Option("--sort", help="recent | highRated | lowRated")] = "recent",
) -> None:
    if sort_by not in controller.SORT_CHOICES:
        _fail(ValidationError(f"--sort must be one of {', '.join(controller.SORT_CHOICES)}"))
    rated = _run_with_progress(RatedMoviesWorker(query, sort_by), "Loading ratings")
    if not rated:
        console.print("No rated movies.")
        return
    table = Table(title="Rated movies")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Stars")
    table.add_column("Rated at", style="dim")
    for r in rated:
        table.add_row(str(r.movie.id), r.movie.title, "★" * r.rating.rating, r.rating.rated_at)
    console.print(table)


@ratings_app.command("set")
def ratings_set(
    movie_id: Annotated[int, typer.Argument()],
    stars: Annotated[int, typer.Argument(min=1, max=5)],
) -> None:
    try:
        controller.rate_movie(movie_id, stars)
    except (ValidationError, StorageError) as exc:
        _fail(exc)
    console.print(f"Rated {movie_id}: {'★' * stars}")


@ratings_app.command("remove")
def ratings_remove(movie_id: Annotated[int, typer.Argument()]) -> None:
    try:
        ratings_storage.remove_rating(movie_id)
    except StorageError as exc:
        _fail(exc)
    console.print("Rating removed.")


@ratings_app.command("clear")
def ratings_clear(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation.")] = False,
) -> None:
    if not yes:
        typer.confirm("Remove all of your ratings?", abort=True)
    try:
        controller.clear_ratings()
    except StorageError as exc:
        _fail(exc)
    console.print("Ratings cleared.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
