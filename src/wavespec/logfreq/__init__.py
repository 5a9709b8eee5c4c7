"""Log-frequency axis remapping package."""

from .methods import log_frequency_axis, remap_to_log_frequency

__all__ = ["log_frequency_axis", "remap_to_log_frequency"]
