"""CLI subcommands."""

from .order import order_cmd
from .order import show_cmd

__all__ = ["order_cmd", "show_cmd"]
