"""Agricultural Capitalism Simulator: a turn-based farming economy game."""

__version__ = "1.0.0"
