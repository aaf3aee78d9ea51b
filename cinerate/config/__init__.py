"""Config package exporting loader helpers."""

from .loader import EntryRulesConfig, PresentationConfig, Settings, load_settings

__all__ = ["EntryRulesConfig", "PresentationConfig", "Settings", "load_settings"]
