"""Pydantic models for the ``settings`` block of the path configuration."""

from typing import Any, List, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class NavbarSettings(BaseModel):
    """Header colours."""
    model_config = ConfigDict(extra="ignore")

    foreground: Optional[str] = None
    background: Optional[str] = None


class TabbarSettings(BaseModel):
    """Tab bar colours."""
    model_config = ConfigDict(extra="ignore")

    background: Optional[str] = None
    selected: Optional[str] = None
    unselected: Optional[str] = None


class TabSettings(BaseModel):
    """One tab. ``visit`` is a backend path."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: Optional[str] = None
    icon: Optional[str] = Field(None, alias="icon_ios")
    visit: str = "/"
    protected: bool = False

    @property
    def label(self) -> str:
        return self.title or self.icon or self.visit


class ButtonSettings(BaseModel):
    """A header button offered on one path."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    path: str
    title: Optional[str] = None
    icon: Optional[str] = Field(None, alias="icon_ios")
    side: str = "right"
    visit: Optional[str] = None
    script: Optional[str] = None
    protected: bool = False

    @field_validator("side")
    @classmethod
    def _validate_side(cls, v):
        if v not in ("left", "right"):
            raise ValueError("side must be 'left' or 'right'")
        return v

    @property
    def label(self) -> Optional[str]:
        return self.title or self.icon


class ShellSettings(BaseModel):
    """Settings served alongside the path rules."""
    model_config = ConfigDict(extra="ignore")

    navbar: Optional[NavbarSettings] = None
    tabbar: Optional[TabbarSettings] = None
    tabs: List[TabSettings] = Field(default_factory=list)
    buttons: List[ButtonSettings] = Field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Optional[Mapping[str, Any]]) -> "ShellSettings":
        """
        Build settings from the raw merged dictionary.

        Invalid entries are dropped one by one so a single bad tab does not
        hide the rest.
        """
        if not isinstance(raw, Mapping):
            return cls()

        values = {}
        for key, model in (("navbar", NavbarSettings), ("tabbar", TabbarSettings)):
            section = raw.get(key)
            if section is None:
                continue
            try:
                values[key] = model.model_validate(section)
            except ValidationError as e:
                logger.warning(f"Ignoring invalid '{key}' settings: {e}")

        for key, model in (("tabs", TabSettings), ("buttons", ButtonSettings)):
            entries = raw.get(key) or []
            if not isinstance(entries, list):
                logger.warning(f"Ignoring '{key}' settings: expected a list")
                continue
            parsed = []
            for index, entry in enumerate(entries):
                try:
                    parsed.append(model.model_validate(entry))
                except ValidationError as e:
                    logger.warning(f"Ignoring invalid entry #{index} in '{key}': {e}")
            values[key] = parsed

        return cls(**values)
