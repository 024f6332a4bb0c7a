"""memmon - Main Textual application."""

import logging
import random

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.logging import TextualHandler
from textual.widgets import Footer, Label, Sparkline, Static

from memmon.config import CRITICAL_THRESHOLD, WARNING_THRESHOLD, MonitorConfig
from memmon.glitch import GlitchEffect
from memmon.models import RenderModel
from memmon.monitor import MetricsSource, MonitorState, create_state, tick

logger = logging.getLogger(__name__)

GREEN = "rgb(0,255,0)"
YELLOW = "rgb(255,255,0)"
RED = "rgb(255,0,0)"
CYAN = "rgb(0,255,255)"
ORANGE = "rgb(255,100,0)"

TITLE_TEXT = "MEMORY MONITOR"
ALARM_TEXT = "WARNING: CRITICAL MEMORY USAGE!"
BAR_WIDTH = 50


def usage_color(
    percent: float,
    warning: float = WARNING_THRESHOLD,
    critical: float = CRITICAL_THRESHOLD,
) -> str:
    """Pick the readout color for a memory percentage."""
    if percent > critical:
        return RED
    if percent > warning:
        return YELLOW
    return GREEN


def build_bar(percent: float) -> str:
    """Render a percentage as a centered run of '#' between brackets."""
    filled = min(max(int(percent / 2), 0), BAR_WIDTH)
    return f"[{'#' * filled:^{BAR_WIDTH}}]"


def format_gb(size: int) -> str:
    """Format bytes as gigabytes with one decimal."""
    return f"{size / 1024**3:.1f} GB"


def title_text(alarm: bool, glitch: GlitchEffect) -> Text:
    """Build the heading, red while the alarm is raised."""
    color = RED if alarm else GREEN
    return Text(glitch.apply(TITLE_TEXT), style=f"bold {color}")


def usage_text(
    percent: float,
    warning: float = WARNING_THRESHOLD,
    critical: float = CRITICAL_THRESHOLD,
) -> Text:
    """Build the percentage readout."""
    return Text(f"Memory Usage: {percent:.1f}%", style=usage_color(percent, warning, critical))


def bar_text(percent: float, glitch: GlitchEffect, critical: float = CRITICAL_THRESHOLD) -> Text:
    """Build the ASCII usage bar, red above the critical threshold."""
    color = RED if percent > critical else GREEN
    return Text(glitch.apply(build_bar(percent)), style=color)


def totals_text(total_memory: int, used_memory: int) -> Text:
    """Build the total and used memory lines."""
    return Text(
        f"Total Memory: {format_gb(total_memory)}\nUsed Memory:  {format_gb(used_memory)}",
        style=CYAN,
    )


def chart_caption(name: str, history: tuple[float, ...]) -> str:
    """Label a chart with its latest and peak percentage, since sparklines have no axis."""
    if not history:
        return f"{name} --"
    return f"{name} {history[-1]:.1f}% (peak {max(history):.1f}%)"


class MemoryChart(Vertical):
    """Scrolling RAM and swap history."""

    DEFAULT_CSS = """
    MemoryChart {
        height: auto;
        margin: 1 2;
    }

    MemoryChart Sparkline {
        height: 5;
        margin-bottom: 1;
    }

    #ram-chart > .sparkline--max-color {
        color: rgb(0,255,0);
    }

    #ram-chart > .sparkline--min-color {
        color: rgb(0,96,0);
    }

    #swap-chart > .sparkline--max-color {
        color: rgb(255,100,0);
    }

    #swap-chart > .sparkline--min-color {
        color: rgb(96,40,0);
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the two charts."""
        yield Label(Text(chart_caption("RAM", ()), style=GREEN), id="ram-caption")
        yield Sparkline([], id="ram-chart")
        yield Label(Text(chart_caption("Swap", ()), style=ORANGE), id="swap-caption")
        yield Sparkline([], id="swap-chart")

    def update_history(self, memory: tuple[float, ...], swap: tuple[float, ...]) -> None:
        """Replace the plotted histories."""
        self.query_one("#ram-caption", Label).update(
            Text(chart_caption("RAM", memory), style=GREEN)
        )
        self.query_one("#ram-chart", Sparkline).data = list(memory)
        self.query_one("#swap-caption", Label).update(
            Text(chart_caption("Swap", swap), style=ORANGE)
        )
        self.query_one("#swap-chart", Sparkline).data = list(swap)


class MemoryMonitorApp(App):
    """Main memmon application."""

    TITLE = "Memory Monitor - Hacker Edition"

    CSS = """
    Screen {
        layout: vertical;
        background: rgb(0,15,0);
    }

    #title, #usage, #bar, #alarm, #totals {
        width: 100%;
        text-align: center;
    }

    #title {
        margin-top: 1;
        text-style: bold;
    }

    #usage {
        margin-top: 2;
    }

    #alarm {
        display: none;
        text-style: bold;
        margin-bottom: 1;
    }

    #totals {
        margin-top: 1;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        source: MetricsSource | None = None,
        config: MonitorConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the MemoryMonitorApp.

        Args:
            source: Where memory counters come from. Defaults to psutil.
            config: Tuning constants. Defaults to MonitorConfig().
            rng: Randomness for the glitch effect, seed it for repeatable output.
        """
        super().__init__()
        self._config = config if config is not None else MonitorConfig()
        self._state = create_state(
            source,
            history_size=self._config.history_size,
            threshold=self._config.critical_threshold,
        )
        self._glitch = GlitchEffect(
            chance=self._config.glitch_chance,
            char_chance=self._config.glitch_char_chance,
            rng=rng,
        )
        self._last_model: RenderModel | None = None

    @property
    def state(self) -> MonitorState:
        """Get the sampling state owned by this app."""
        return self._state

    @property
    def last_model(self) -> RenderModel | None:
        """Get the model rendered on the most recent tick."""
        return self._last_model

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Static(id="title")
        yield Static(id="usage")
        yield Static(id="bar")
        yield MemoryChart(id="chart")
        yield Static(Text(ALARM_TEXT, style=f"bold {RED}"), id="alarm")
        yield Static(id="totals")
        yield Footer()

    def on_mount(self) -> None:
        """Draw the first tick and start the refresh timer."""
        self._refresh_dashboard()
        self.set_interval(self._config.refresh_interval, self._refresh_dashboard)

    def _refresh_dashboard(self) -> None:
        """Sample memory and redraw the dashboard."""
        model = tick(self._state)
        self._glitch.roll()
        previous = self._last_model
        if model.alarm and (previous is None or not previous.alarm):
            logger.warning("Memory usage critical: %.1f%%", model.memory_percent)
        elif not model.alarm and previous is not None and previous.alarm:
            logger.info("Memory usage back to normal: %.1f%%", model.memory_percent)
        self._last_model = model
        self._update_ui(model)

    def _update_ui(self, model: RenderModel) -> None:
        """Push a render model into the widgets."""
        config = self._config
        try:
            self.query_one("#title", Static).update(title_text(model.alarm, self._glitch))
            self.query_one("#usage", Static).update(
                usage_text(
                    model.memory_percent,
                    warning=config.warning_threshold,
                    critical=config.critical_threshold,
                )
            )
            self.query_one("#bar", Static).update(
                bar_text(model.memory_percent, self._glitch, critical=config.critical_threshold)
            )
            self.query_one(MemoryChart).update_history(model.memory_history, model.swap_history)
            self.query_one("#alarm", Static).display = model.alarm
            self.query_one("#totals", Static).update(
                totals_text(model.total_memory, model.used_memory)
            )
        except NoMatches:
            pass  # Widgets not mounted yet


def main() -> None:
    """Entry point for memmon application."""
    logging.basicConfig(level=logging.INFO, handlers=[TextualHandler()])
    app = MemoryMonitorApp()
    app.run()


if __name__ == "__main__":
    main()
