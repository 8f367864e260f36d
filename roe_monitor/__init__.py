"""ROE/HF Monitor - live resampled dashboard for leveraged lending positions."""

__version__ = "0.1.0"
