# ui.py
from typing import List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.message import Message
from textual.widgets import (Button, DataTable, Input, Label, Markdown, RichLog,
                             Static)

from models import AppState, MovieDetail, MovieSummary

NO_IMAGE = "No Image"
LOADING_TEXT = "Loading..."
NO_RESULTS_TEXT = "No movies found"

def poster_label(poster_url: str, has_poster: bool) -> str:
    return poster_url if has_poster else NO_IMAGE

def status_text(state: AppState) -> str:
    """What the status line should say for a given state."""
    if state.is_loading:
        return LOADING_TEXT
    if state.has_searched and not state.results and not state.error and state.query:
        return NO_RESULTS_TEXT
    return ""

def format_details(movie: MovieDetail) -> str:
    """Renders a detail record as Markdown for the details pane."""
    poster = f"[Poster]({movie.poster})" if movie.has_poster else f"*{NO_IMAGE}*"
    lines = [
        f"## {movie.title}",
        "",
        poster,
        "",
        f"- **Year**: {movie.year}",
        f"- **Rating**: {movie.rated}",
        f"- **Runtime**: {movie.runtime}",
        f"- **Genre**: {movie.genre}",
        f"- **Director**: {movie.director}",
        f"- **Actors**: {movie.actors}",
    ]
    if movie.has_rating:
        lines.append(f"- **IMDb Rating**: {movie.imdb_rating}/10")
    lines += ["", "**Plot:**", "", movie.plot, "", f"`{movie.link}`"]
    return "\n".join(lines)


class SearchControls(Static):
    """Widget for the search input and button."""
    class SearchRequested(Message):
        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    def compose(self) -> ComposeResult:
        yield Label("Enter a movie title:")
        yield Input(placeholder="Search for a movie...", id="search-input")
        yield Button("Search", variant="primary", id="search-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "search-button":
            event.stop()
            self.post_search_message()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.post_search_message()

    def post_search_message(self) -> None:
        # empty queries are posted too; the app reports them
        self.post_message(self.SearchRequested(self.query_one(Input).value))

    def set_busy(self, busy: bool) -> None:
        self.query_one("#search-button", Button).disabled = busy


class ErrorLine(Static):
    """Shows the current error message, if any."""
    def show_error(self, message: str) -> None:
        self.update(Text(message, style="bold red"))
        self.display = bool(message)


class StatusLine(Static):
    def show_state(self, state: AppState) -> None:
        text = status_text(state)
        self.update(text)
        self.display = bool(text)


class DetailsPane(Static):
    """Widget to display details of the selected movie."""
    class CloseRequested(Message):
        pass

    def compose(self) -> ComposeResult:
        yield Button("×", id="close-details")
        yield Markdown()

    def on_mount(self) -> None:
        self.update_details(None)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "close-details":
            event.stop()
            self.post_message(self.CloseRequested())

    def update_details(self, movie: Optional[MovieDetail]) -> None:
        if movie:
            self.query_one(Markdown).update(format_details(movie))
        self.display = movie is not None


class ResultsDisplay(DataTable):
    """Widget for the main results table."""
    class MovieChosen(Message):
        def __init__(self, imdb_id: str) -> None:
            self.imdb_id = imdb_id
            super().__init__()

    def on_mount(self) -> None:
        self.add_columns("Title", "Year", "Type", "Poster")
        self.cursor_type = "row"

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if event.row_key.value:
            self.post_message(self.MovieChosen(event.row_key.value))

    def update_results(self, results: List[MovieSummary]) -> None:
        self.clear()
        for m in results:
            self.add_row(m.title, m.year, m.type, poster_label(m.poster, m.has_poster), key=m.imdb_id)
        if results:
            self.focus()


class LogPane(RichLog):
    """A dedicated widget for logging application events."""
    def add_message(self, message: str) -> None:
        self.write(message)
