"""Main Textual application for ROE/HF Monitor."""

import logging

from textual.app import App
from textual.binding import Binding

from config.settings import get_settings
from roe_monitor.ui.screens import MonitorScreen

# Suppress INFO logs in UI - only show warnings and errors
logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)


class RoeMonitorApp(App):
    """Terminal dashboard for a leveraged lending position's ROE and rates."""

    TITLE = "DeFi ROE/HF Monitor"

    CSS = """
    Screen { background: #000000; }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self):
        super().__init__()
        self.settings = get_settings()

    def on_mount(self) -> None:
        """Show the monitor once the app is mounted."""
        self.sub_title = f"{self.settings.network} · {self.settings.default_leverage:g}x"
        self.push_screen(MonitorScreen(settings=self.settings))


def main():
    RoeMonitorApp().run()


if __name__ == "__main__":
    main()
