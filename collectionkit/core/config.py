from typing import Any, Literal, Optional, List
import json
import os
from pydantic import BaseModel, Field
from loguru import logger
from .events import Signal


# --- Collection Settings Models ---
class SelectionSettings(BaseModel):
    selection_mode: Literal["none", "single", "multiple"] = "multiple"
    disallow_empty_selection: bool = False
    disabled_behavior: Literal["selection", "all"] = "selection"
    selection_behavior: Literal["toggle", "replace"] = "toggle"


class KeyboardSettings(BaseModel):
    typeahead_timeout_ms: int = 500
    page_size: int = 10
    vertical_alignment_bias: float = 1000.0


class LayoutSettings(BaseModel):
    overscan: int = 5
    width_change_threshold: float = 10.0
    list_gap: float = 0.0
    list_padding: float = 0.0
    grid_gap: float = 16.0
    grid_min_item_width: float = 200.0
    inline_gap: float = 16.0
    inline_item_width: float = 100.0
    inline_item_height: float = 50.0


class FilterSettings(BaseModel):
    debounce_ms: int = 300
    min_query_length: int = 1
    score_cutoff: float = 60.0
    result_limit: Optional[int] = None
    filter_keys: List[str] = Field(default_factory=list)


class CollectionConfig(BaseModel):
    selection: SelectionSettings = Field(default_factory=SelectionSettings)
    keyboard: KeyboardSettings = Field(default_factory=KeyboardSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    filter: FilterSettings = Field(default_factory=FilterSettings)


# --- Manager ---
class ConfigManager:
    """
    Manages collection configuration with optional persistence and reactivity.

    Each collection owns its own manager; passing ``filepath=None`` keeps the
    configuration in memory only.
    """
    def __init__(self, filepath: Optional[str] = None, config: Optional[CollectionConfig] = None):
        self.filepath = filepath
        self._data = config or CollectionConfig()
        self.on_changed = Signal("ConfigChanged")
        if self.filepath:
            self._load()

    @property
    def data(self) -> CollectionConfig:
        return self._data

    def update(self, section: str, key: str, value: Any):
        """Update a setting, validate via Pydantic, autosave, and emit change event."""
        if section not in CollectionConfig.model_fields:
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if key not in type(section_obj).model_fields:
            raise ValueError(f"Invalid key: {key} in section {section}")

        # Round-trip through the model so bad values raise ValidationError
        patched = section_obj.model_dump()
        patched[key] = value
        validated = type(section_obj).model_validate(patched)
        setattr(self._data, section, validated)

        self._save()
        self.on_changed.emit(section, key, getattr(validated, key))

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                self._data = CollectionConfig.model_validate(raw)
            except Exception as e:
                logger.error(f"Failed to load config from {self.filepath}: {e}")
                self._data = CollectionConfig()
                self._save()
        else:
            self._save()

    def _save(self):
        """Persist current config to JSON file."""
        if not self.filepath or self.filepath.endswith('.toml'):
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except Exception as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
