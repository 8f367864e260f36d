"""Vault picker with live autocomplete filtering."""

from typing import List, Optional

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Input, Label, OptionList
from textual.widgets.option_list import Option

from roe_monitor.core.models import Asset
from roe_monitor.data.assets import display_asset, filter_assets


class AssetPicker(Vertical):
    """Input plus an option list filtered by address, symbol or name."""

    class Selected(Message):
        """Posted when a vault is picked."""

        def __init__(self, picker: "AssetPicker", address: str):
            super().__init__()
            self.picker = picker
            self.address = address

    def __init__(self, title: str, address: str = "", **kwargs):
        super().__init__(**kwargs)
        self._title = title
        self._assets: List[Asset] = []
        self.address = address

    def compose(self) -> ComposeResult:
        yield Label(self._title)
        yield Input(placeholder="Symbol, name or address")
        yield OptionList()

    def set_assets(self, assets: List[Asset]) -> None:
        """Replace the catalogue and show the current selection."""
        self._assets = assets
        self.query_one(Input).value = display_asset(self.address, assets)
        self._show_options(assets)

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        value = event.value
        if value == display_asset(self.address, self._assets):
            return
        self._show_options(filter_assets(self._assets, value))

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        address: Optional[str] = event.option.id
        if not address:
            return
        self.address = address
        self.query_one(Input).value = display_asset(address, self._assets)
        self.post_message(self.Selected(self, address))

    def _show_options(self, assets: List[Asset]) -> None:
        options = self.query_one(OptionList)
        options.clear_options()
        options.add_options(
            [Option(f"{a.vault_symbol}  {a.vault_name}", id=a.vault_address) for a in assets]
        )
