"""
TypeaheadDemoApp - small Textual application showing ReactiveTypeahead.

Two pickers share one FormGroup: the country picker binds by name, the city
picker binds to its control directly and narrows its suggestions to the
selected country.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from reactive_typeahead.config import TypeaheadSettings
from reactive_typeahead.forms import FormControl, FormGroup, StatusChanged, ValidationMessage, Validators, ValueChanged
from reactive_typeahead.logger import get_logger
from reactive_typeahead.typeahead import InputDecoration, TextFieldConfig
from reactive_typeahead.widgets import ReactiveForm, ReactiveTypeahead

logger = get_logger("demo")


@dataclass(frozen=True)
class City:
    name: str
    country: str

    def __str__(self) -> str:
        return f"{self.name}, {self.country}"


CITIES: tuple[City, ...] = (
    City("Lisbon", "Portugal"),
    City("Porto", "Portugal"),
    City("Coimbra", "Portugal"),
    City("Madrid", "Spain"),
    City("Barcelona", "Spain"),
    City("Valencia", "Spain"),
    City("Paris", "France"),
    City("Lyon", "France"),
    City("Marseille", "France"),
    City("Berlin", "Germany"),
    City("Munich", "Germany"),
    City("Hamburg", "Germany"),
)

COUNTRIES: tuple[str, ...] = tuple(sorted({city.country for city in CITIES}))


class TypeaheadDemoApp(App):
    """Country/city picker backed by a reactive form."""

    TITLE = "reactive-typeahead"
    SUB_TITLE = "Typeahead inputs bound to form controls"

    CSS = """
    Screen {
        align: center top;
    }

    ReactiveForm {
        width: 60;
        margin: 1 2;
    }

    #summary {
        margin: 1 2;
        height: auto;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+r", "reset_form", "Reset"),
        Binding("ctrl+t", "touch_all", "Validate"),
    ]

    def __init__(self, settings: Optional[TypeaheadSettings] = None, latency: float = 0.2) -> None:
        super().__init__()
        self.settings = settings or TypeaheadSettings()
        self.latency = latency
        self.form = FormGroup(
            {
                "country": FormControl(validators=[Validators.required]),
                "city": FormControl(validators=[Validators.required]),
            }
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield ReactiveForm(
            self.form,
            ReactiveTypeahead(
                form_control_name="country",
                stringify=str,
                suggestions_callback=self.search_countries,
                item_builder=str,
                validation_messages={ValidationMessage.required: "Pick a country"},
                suggestions=self.settings.suggestions_config(get_immediate_suggestions=True),
                text_field=TextFieldConfig(
                    placeholder="Country",
                    decoration=InputDecoration(label="Country"),
                    autofocus=True,
                ),
                id="country",
            ),
            ReactiveTypeahead(
                form_control=self.form.control("city"),
                stringify=lambda city: city.name,
                suggestions_callback=self.search_cities,
                item_builder=self.render_city,
                validation_messages={ValidationMessage.required: "Pick a city"},
                suggestions=self.settings.suggestions_config(),
                text_field=TextFieldConfig(
                    placeholder="City",
                    decoration=InputDecoration(label="City", helper_text="type to search"),
                ),
                id="city",
            ),
        )
        yield Static(id="summary")
        yield Footer()

    def on_mount(self) -> None:
        self.form.events.subscribe(ValueChanged, self._on_form_changed)
        self.form.events.subscribe(StatusChanged, self._on_form_changed)
        self._show_summary()

    def on_unmount(self) -> None:
        self.form.events.clear()

    async def search_countries(self, pattern: str) -> list[str]:
        await asyncio.sleep(self.latency)
        needle = pattern.strip().lower()
        return [country for country in COUNTRIES if needle in country.lower()]

    async def search_cities(self, pattern: str) -> list[City]:
        await asyncio.sleep(self.latency)
        needle = pattern.strip().lower()
        country = self.form.control("country").value
        return [
            city
            for city in CITIES
            if needle in city.name.lower() and (country is None or city.country == country)
        ]

    @staticmethod
    def render_city(city: City) -> Text:
        text = Text(city.name, style="bold")
        text.append(f"  {city.country}", style="dim")
        return text

    def on_reactive_typeahead_selected(self, message: ReactiveTypeahead.Selected) -> None:
        logger.info(f"Selected {message.item!r} in #{message.typeahead.id}")
        if message.typeahead.id == "country":
            city = self.form.control("city")
            if city.value is not None and city.value.country != message.item:
                city.reset()

    def action_reset_form(self) -> None:
        for control in self.form.controls.values():
            if isinstance(control, FormControl):
                control.reset()

    def action_touch_all(self) -> None:
        self.form.mark_all_as_touched()

    def _on_form_changed(self, event) -> None:
        self._show_summary()

    def _show_summary(self) -> None:
        summary = Text()
        summary.append("Form: ", style="bold")
        summary.append(self.form.status.value, style="green" if self.form.valid else "red")
        for name, value in self.form.value.items():
            summary.append(f"\n  {name}: ")
            summary.append(str(value) if value is not None else "-", style="cyan")
        self.query_one("#summary", Static).update(summary)
