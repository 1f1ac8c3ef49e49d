#!/usr/bin/env python
"""
UI configuration - settings for the fee editor screen.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from sendcheck.config import SendCheckConfig, get_config
from sendcheck.config.defaults import EDITOR_FIELD_WIDTH, EDITOR_REFRESH_INTERVAL
from sendcheck.tokens import FeeUnit


def _default_styles() -> dict:
    return {
        "field": "fg:ansiwhite bg:ansiblack",
        "field.cursor": "fg:ansiblack bg:ansiwhite",
        "invalid": "fg:ansired bold",
        "safe": "fg:ansigreen bold",
        "low": "fg:ansiyellow bold",
        "too-low": "fg:ansibrightred bold",
    }


@dataclass
class EditorConfig:
    """Configuration for the fee editor."""

    field_width: int = EDITOR_FIELD_WIDTH
    refresh_interval: float = EDITOR_REFRESH_INTERVAL
    fee_unit: FeeUnit = FeeUnit.FIL
    full_screen: bool = True
    styles: dict = field(default_factory=_default_styles)

    def __post_init__(self):
        self.fee_unit = FeeUnit(self.fee_unit)

    @classmethod
    def from_config(cls, config: SendCheckConfig) -> "EditorConfig":
        return cls(
            refresh_interval=config.refresh_interval,
            fee_unit=FeeUnit(config.fee_unit),
        )


# Global config instance
_config: Optional[EditorConfig] = None


def get_editor_config() -> EditorConfig:
    """Get the global editor config."""
    global _config
    if _config is None:
        _config = EditorConfig.from_config(get_config())
    return _config

