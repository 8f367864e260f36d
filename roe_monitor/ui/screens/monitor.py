"""Live ROE/HF monitor screen: chart, stats and sortable table."""

import logging
from dataclasses import replace
from typing import Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header, Input, Label, Static

from config.settings import Settings, get_settings
from roe_monitor.analytics.engine import SeriesEngine
from roe_monitor.core.channels import BORROW, BORROW_REWARD, ROE, SUPPLY, SUPPLY_REWARD
from roe_monitor.core.models import EDITABLE_FIELDS, ChartFrame, PositionConfig
from roe_monitor.data.assets import sort_assets
from roe_monitor.data.client import RoeHfClient
from roe_monitor.data.session import LiveSession
from roe_monitor.ui.widgets import AssetPicker, SeriesChart, SeriesTable, StatsPanel

logger = logging.getLogger(__name__)

BRUSH_NUDGE = 0.05
ZOOM_STEP = 2.0
PAN_STEP = 0.25

POSITION_INPUTS = [
    ("leverage", "Leverage"),
    ("collateral_rewards_apy_pct", "Collateral rewards %"),
    ("borrow_rewards_apy_pct", "Borrow rewards %"),
]


class MonitorScreen(Screen):
    """Screen wiring the live session and series engine to the widgets."""

    BINDINGS = [
        Binding("r", "reload", "Reload"),
        Binding("f", "full_extent", "Full"),
        Binding("plus", "zoom_in", "Zoom +"),
        Binding("minus", "zoom_out", "Zoom -"),
        Binding("left", "pan(-1)", "Pan ←", show=False),
        Binding("right", "pan(1)", "Pan →", show=False),
        Binding("left_square_bracket", "brush_start(-1)", "Brush start ←", show=False),
        Binding("right_square_bracket", "brush_start(1)", "Brush start →", show=False),
        Binding("left_curly_bracket", "brush_end(-1)", "Brush end ←", show=False),
        Binding("right_curly_bracket", "brush_end(1)", "Brush end →", show=False),
        Binding("1", "range('1d')", "1D"),
        Binding("2", "range('30d')", "30D"),
        Binding("3", "range('360d')", "360D"),
        Binding("s", f"toggle('{SUPPLY}')", "Supply", show=False),
        Binding("b", f"toggle('{BORROW}')", "Borrow", show=False),
        Binding("o", f"toggle('{ROE}')", "ROE", show=False),
        Binding("c", f"toggle('{SUPPLY_REWARD}')", "Supply reward", show=False),
        Binding("d", f"toggle('{BORROW_REWARD}')", "Borrow reward", show=False),
    ]

    CSS = """
    MonitorScreen {
        background: #000000;
    }
    #pickers {
        height: 12;
        background: #111;
    }
    #pickers AssetPicker {
        width: 1fr;
        padding: 0 1;
    }
    #pickers Label {
        color: #ff8c00;
        text-style: bold;
    }
    #pickers OptionList {
        height: 6;
    }
    #position {
        height: 3;
        background: #111;
    }
    #position Label {
        color: #ff8c00;
        padding: 1 1 0 2;
    }
    #position Input {
        width: 14;
    }
    #monitor-main {
        height: 1fr;
    }
    #series-chart {
        border: solid #333;
        height: auto;
        padding: 0 1;
    }
    #lower {
        height: 1fr;
    }
    #stats-panel {
        width: 50;
    }
    #series-table {
        width: 1fr;
    }
    #status-bar {
        dock: bottom;
        height: 1;
        background: #111;
        color: #888;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[RoeHfClient] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.settings = settings or get_settings()
        self.client = client or RoeHfClient(self.settings)
        self.chart = SeriesChart(id="series-chart")
        self.engine = SeriesEngine(
            settings=self.settings,
            rendered_range_provider=self.chart.rendered_range,
        )
        self.session = LiveSession(
            client=self.client,
            engine=self.engine,
            config=self._default_config(),
            settings=self.settings,
        )
        self.engine.add_listener(self._on_frame)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="pickers"):
            yield AssetPicker(
                "Collateral vault",
                address=self.settings.default_collateral_vault,
                id="collateral-picker",
            )
            yield AssetPicker(
                "Borrow vault",
                address=self.settings.default_borrow_vault,
                id="borrow-picker",
            )
        with Horizontal(id="position"):
            for field_name, title in POSITION_INPUTS:
                yield Label(title)
                yield Input(
                    value=f"{getattr(self.session.config, field_name):g}",
                    id=field_name,
                )
        with Container(id="monitor-main"):
            yield self.chart
            with Horizontal(id="lower"):
                yield StatsPanel(id="stats-panel")
                yield SeriesTable(id="series-table")
        yield Static("Loading...", id="status-bar")
        yield Footer()

    async def on_mount(self) -> None:
        """Load the asset catalogue and the default series."""
        self.engine.set_available_width(self.chart.plot_columns)
        await self._load_assets()
        await self._load_series()

    async def on_unmount(self) -> None:
        self.session.stop()
        await self.client.close()

    def on_resize(self) -> None:
        self.engine.set_available_width(self.chart.plot_columns)

    async def on_asset_picker_selected(self, event: AssetPicker.Selected) -> None:
        """Switching a vault discards the current store and reloads."""
        config = self.session.config
        if event.picker.id == "collateral-picker":
            address_field = "collateral_vault"
        else:
            address_field = "borrow_vault"
        if getattr(config, address_field) == event.address:
            return

        self.session.reconfigure(replace(config, **{address_field: event.address}))
        await self._load_series()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        """Leverage and reward edits reload the series for the new config."""
        if event.input.id not in EDITABLE_FIELDS:
            return
        event.stop()
        config = self.session.config
        try:
            updated = config.with_value(event.input.id, event.value)
        except ValueError as e:
            logger.warning(f"Rejected position edit: {e}")
            self._set_status(f"⚠️ {e}")
            return
        if updated == config:
            return

        self.session.reconfigure(updated)
        await self._load_series()

    # ========== ACTIONS ==========

    async def action_reload(self) -> None:
        await self._load_series()

    async def action_range(self, key: str) -> None:
        await self._load_series(key)

    def action_full_extent(self) -> None:
        self.engine.tracker.set_full_extent()

    def action_zoom_in(self) -> None:
        self.engine.tracker.zoom(ZOOM_STEP)

    def action_zoom_out(self) -> None:
        self.engine.tracker.zoom(1 / ZOOM_STEP)

    def action_pan(self, direction: int) -> None:
        self.engine.tracker.pan(direction * PAN_STEP)

    def action_brush_start(self, direction: int) -> None:
        start, end = self.engine.tracker.fractions()
        self.engine.tracker.set_from_brush(start + direction * BRUSH_NUDGE, end)

    def action_brush_end(self, direction: int) -> None:
        start, end = self.engine.tracker.fractions()
        self.engine.tracker.set_from_brush(start, end + direction * BRUSH_NUDGE)

    def action_toggle(self, channel: str) -> None:
        self.engine.toggle_channel(channel)

    # ========== HELPERS ==========

    def _default_config(self) -> PositionConfig:
        return PositionConfig(
            network=self.settings.network,
            collateral_vault=self.settings.default_collateral_vault,
            borrow_vault=self.settings.default_borrow_vault,
            leverage=self.settings.default_leverage,
            collateral_rewards_apy_pct=self.settings.collateral_rewards_apy_pct,
            borrow_rewards_apy_pct=self.settings.borrow_rewards_apy_pct,
            liquidation_threshold_pct=self.settings.liquidation_threshold_pct,
        )

    async def _load_assets(self) -> None:
        try:
            assets = sort_assets(await self.client.get_assets(self.settings.network))
        except Exception as e:
            logger.error(f"Error loading assets: {e}")
            self._set_status(f"❌ Assets unavailable: {e}")
            return

        for picker in self.query(AssetPicker):
            picker.set_assets(assets)

    async def _load_series(self, range_key: Optional[str] = None) -> None:
        self._set_status("⏳ Fetching ROE/HF series...")
        if not await self.session.load(range_key):
            self._set_status("⚠️ No series received - press R to retry")

    def _on_frame(self, frame: ChartFrame) -> None:
        """Engine listener: redraw chart, stats, table and status."""
        if not self.is_mounted:
            return
        self.chart.update_frame(frame)
        self.query_one(StatsPanel).update_frame(frame)
        self.query_one(SeriesTable).load_rows(self.engine.table_rows())

        start, end = self.engine.tracker.fractions()
        latest = self.session.latest
        roe = f"ROE {latest.roe_pct:.2f}% HF {latest.hf or 0:.2f}" if latest else "no data"
        self._set_status(
            f"{len(self.engine.store)} points | {frame.sample_count} samples "
            f"(target {frame.decimation_target}) | brush {start:.2f}-{end:.2f} | "
            f"{roe} | range {self.session.range_key}"
        )

    def _set_status(self, message: str) -> None:
        if self.is_mounted:
            self.query_one("#status-bar", Static).update(message)
