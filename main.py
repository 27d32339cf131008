# main.py
import asyncio
import logging
from dataclasses import replace
try:
    import pyperclip
except ImportError:
    pyperclip = None

import requests
from rich.markup import escape
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.reactive import reactive
from textual.widgets import Footer, Header, Input

from config import Config
from logger_conf import get_logger
from models import AppState
from services import MovieSearchService, OmdbError
from ui import DetailsPane, ErrorLine, LogPane, ResultsDisplay, SearchControls, StatusLine

logger = logging.getLogger("movie-search.app")

EMPTY_QUERY_MESSAGE = "Please enter a movie title"
SEARCH_FAILED_MESSAGE = "Something went wrong. Please try again."
DETAILS_FAILED_MESSAGE = "Failed to load movie details."

class MovieSearchApp(App):
    TITLE = "Movie Search"
    BINDINGS = [
        ("d", "toggle_dark", "Toggle dark mode"),
        ("q", "quit", "Quit"),
        ("c", "copy_link", "Copy Link"),
        ("escape", "close_details", "Close Details"),
    ]
    CSS = """
    SearchControls { height: auto; padding: 0 1; }
    #error { padding: 0 1; }
    #status { padding: 1 1; width: 100%; text-align: center; }
    #app-grid { height: 1fr; }
    #results-table { width: 1fr; }
    #details-pane { width: 1fr; height: 1fr; border: round $accent; padding: 0 1; overflow-y: auto; }
    #close-details { dock: right; min-width: 5; }
    #log { height: 8; border: round $primary; }
    """

    # watchers are driven from on_mount, once the widgets exist
    app_state = reactive(AppState, always_update=True, init=False)

    def __init__(self, search_service: MovieSearchService, config: Config):
        super().__init__()
        self.search_service = search_service
        self.config = config

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main-container"):
            yield SearchControls()
            yield ErrorLine(id="error")
            yield StatusLine(id="status")
            with Horizontal(id="app-grid"):
                yield ResultsDisplay(id="results-table")
                yield DetailsPane(id="details-pane")
            yield LogPane(id="log", wrap=True, highlight=True, markup=True)
        yield Footer()

    def on_mount(self) -> None:
        log = self.query_one(LogPane)
        self.query_one(Input).focus()
        if self.config.OMDB_API_KEY:
            log.add_message("[green]✅ OMDb API key found.[/green]")
        else:
            log.add_message("[yellow]⚠️ OMDB_API_KEY is not set; requests will be rejected.[/yellow]")
        if pyperclip:
            log.add_message("[green]✅ Clipboard found.[/green]")
        else:
            log.add_message("[yellow]⚠️ 'pyperclip' not installed.[/yellow]")
        self.watch_app_state(AppState(), self.app_state)

    def watch_app_state(self, old_state: AppState, new_state: AppState) -> None:
        if old_state.results != new_state.results:
            self.query_one(ResultsDisplay).update_results(new_state.results)
        self.query_one(DetailsPane).update_details(new_state.selected_movie)
        self.query_one(ErrorLine).show_error(new_state.error)
        self.query_one(StatusLine).show_state(new_state)
        self.query_one(SearchControls).set_busy(new_state.is_loading)

    def action_toggle_dark(self) -> None:
        self.theme = "textual-light" if self.theme == "textual-dark" else "textual-dark"

    def action_copy_link(self) -> None:
        log = self.query_one(LogPane)
        if not pyperclip:
            log.add_message("[red]❌ 'pyperclip' not installed.[/red]")
            return
        movie = self.app_state.selected_movie
        if movie:
            pyperclip.copy(movie.link)
            log.add_message(f"📋 Copied link for '[b]{escape(movie.title)}[/b]'.")
        else:
            log.add_message("[yellow]⚠️ No movie selected.[/yellow]")

    def action_close_details(self) -> None:
        self.app_state = replace(self.app_state, selected_movie=None)

    # --- Operations ---
    def submit_search(self, query: str) -> None:
        if not query.strip():
            self.app_state = replace(self.app_state, error=EMPTY_QUERY_MESSAGE)
            return
        self.query_one(LogPane).add_message(f"🔎 Searching for '{escape(query.strip())}'...")
        self.app_state = replace(self.app_state, is_loading=True, error="", selected_movie=None)
        # no cancellation: an earlier, slower search may still land last
        self.run_worker(self.perform_search(query.strip()), group="search_worker")

    def select_movie(self, imdb_id: str) -> None:
        self.app_state = replace(self.app_state, is_loading=True)
        self.run_worker(self.perform_select(imdb_id), group="details_worker")

    # --- Message Handlers ---
    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input" and event.value != self.app_state.query:
            self.app_state = replace(self.app_state, query=event.value)

    def on_search_controls_search_requested(self, message: SearchControls.SearchRequested) -> None:
        self.submit_search(message.query)

    def on_results_display_movie_chosen(self, message: ResultsDisplay.MovieChosen) -> None:
        self.select_movie(message.imdb_id)

    def on_details_pane_close_requested(self, message: DetailsPane.CloseRequested) -> None:
        self.action_close_details()

    # --- Worker Methods ---
    async def perform_search(self, query: str) -> None:
        log = self.query_one(LogPane)
        logger.info("Searching for %r", query)
        try:
            results = await asyncio.to_thread(self.search_service.search, query)
        except OmdbError as e:
            self.app_state = replace(self.app_state, results=[], error=e.message,
                                     is_loading=False, has_searched=True)
            log.add_message(f"🤷 {escape(e.message)}")
            return
        except requests.RequestException as e:
            logger.warning("Search for %r failed: %s", query, e)
            self.app_state = replace(self.app_state, results=[], error=SEARCH_FAILED_MESSAGE,
                                     is_loading=False, has_searched=True)
            log.add_message(f"[red]❌ An error occurred during search.[/red]")
            log.add_message(f"[dim]{escape(str(e))}[/dim]")
            return

        self.app_state = replace(self.app_state, results=results, error="",
                                 is_loading=False, has_searched=True)
        log.add_message(f"🎬 Found {len(results)} results for '{escape(query)}'.")

    async def perform_select(self, imdb_id: str) -> None:
        log = self.query_one(LogPane)
        logger.info("Loading details for %s", imdb_id)
        try:
            movie = await asyncio.to_thread(self.search_service.get_details, imdb_id)
        except (OmdbError, requests.RequestException) as e:
            logger.warning("Details for %s failed: %s", imdb_id, e)
            self.app_state = replace(self.app_state, error=DETAILS_FAILED_MESSAGE, is_loading=False)
            log.add_message(f"[red]❌ Could not load details for {imdb_id}.[/red]")
            return

        self.app_state = replace(self.app_state, selected_movie=movie, error="", is_loading=False)
        log.add_message(f"📄 Showing '[b]{escape(movie.title)}[/b]' ({movie.year}).")


def run() -> None:
    app_config = Config.from_env()
    get_logger("movie-search", app_config.LOG_FILENAME, app_config.LOG_LEVEL)
    search_service = MovieSearchService(app_config.OMDB_API_KEY, app_config.OMDB_URL,
                                        timeout=app_config.REQUEST_TIMEOUT)

    app = MovieSearchApp(search_service, app_config)
    app.run()


if __name__ == "__main__":
    run()
