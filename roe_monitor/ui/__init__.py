"""Terminal UI for ROE/HF Monitor."""
