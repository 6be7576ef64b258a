"""
Configuration management for StrictStrings using Pydantic.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

DEFAULT_LANGUAGES: List[str] = ["en", "fr", "de", "es", "ru", "zh-cn", "zh-tw"]

# --- Nested Configuration Models ---


class ScannerConfig(BaseModel):
    """Byte scanner configuration."""

    min_length: int = Field(default=6, ge=0, description="Minimum length of strings to keep.")
    max_length: int = Field(default=200, ge=0, description="Maximum length of strings to keep.")
    chunk_size: int = Field(default=1024, gt=0, description="Size of each read from the input stream.")

    @model_validator(mode="after")
    def validate_bounds(self) -> ScannerConfig:
        """Ensure the length window is not empty."""
        if self.max_length < self.min_length:
            raise ValueError("max_length must be greater than or equal to min_length")
        return self


class FilterConfig(BaseModel):
    """Configuration for the density, language and letter-pair filters."""

    wslen: int = Field(default=30, ge=0, description="Length from which strings need whitespace to survive.")
    lang_threshold: float = Field(default=0.5, description="Confidence the target language must exceed.")
    target_language: str = Field(default="en", description="Language code the strings must be written in.")
    languages: List[str] = Field(
        default_factory=lambda: list(DEFAULT_LANGUAGES),
        description="Languages the detector chooses between.",
    )
    seed: int = Field(default=0, description="Seed for the language detector.")

    @field_validator("lang_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        """Ensure language threshold is in valid range."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("lang_threshold must be between 0.0 and 1.0")
        return v

    @field_validator("languages")
    @classmethod
    def validate_languages(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("languages must contain at least one language")
        return [lang.lower() for lang in v]

    @model_validator(mode="after")
    def validate_target(self) -> FilterConfig:
        self.target_language = self.target_language.lower()
        if self.target_language not in self.languages:
            raise ValueError(f"target_language '{self.target_language}' is not one of {self.languages}")
        return self


class DedupConfig(BaseModel):
    """Similarity deduplication configuration."""

    leven_threshold: float = Field(default=0.8, description="Similarity at which strings count as duplicates.")
    algorithm: Literal["levenshtein", "indel", "jaro_winkler"] = Field(
        default="levenshtein", description="Normalized similarity metric."
    )

    @field_validator("leven_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        """Ensure similarity threshold is in valid range."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("leven_threshold must be between 0.0 and 1.0")
        return v


class OutputConfig(BaseModel):
    """Where and how results are written."""

    outfile: Optional[Path] = Field(default=None, description="File receiving the final strings.")
    log_dir: Optional[Path] = Field(default=None, description="Directory receiving the rejection logs.")
    print_bytes: bool = Field(default=False, description="Show a table with the byte representation.")
    quiet: bool = Field(default=False, description="Only print the result strings.")


class MonitoringConfig(BaseModel):
    """Configuration for application logging."""

    log_level: str = Field(default="WARNING", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: Optional[str] = Field(default=None, description="Path to log file. If None, logs to stderr.")

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---

# Flat CLI option name -> (section, field)
_OVERRIDE_FIELDS: Dict[str, tuple[str, str]] = {
    "min_length": ("scanner", "min_length"),
    "max_length": ("scanner", "max_length"),
    "chunk_size": ("scanner", "chunk_size"),
    "wslen": ("filters", "wslen"),
    "lang_threshold": ("filters", "lang_threshold"),
    "target_language": ("filters", "target_language"),
    "leven_threshold": ("dedup", "leven_threshold"),
    "algorithm": ("dedup", "algorithm"),
    "outfile": ("output", "outfile"),
    "log_dir": ("output", "log_dir"),
    "print_bytes": ("output", "print_bytes"),
    "quiet": ("output", "quiet"),
    "log_level": ("monitoring", "log_level"),
    "log_file": ("monitoring", "log_file"),
}


class Config(BaseSettings):
    project_name: str = "StrictStrings"
    version: str = "0.1.0"
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)
    dedup: DedupConfig = Field(default_factory=DedupConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="STRICTSTRINGS_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls()
        # File values take precedence over STRICTSTRINGS_* environment values
        return cls(**yaml_data)

    def with_overrides(self, **values: Any) -> Config:
        """
        Return a copy with flat option values applied on top.

        ``None`` values are skipped so unset command-line options keep the
        file or environment value. The result is validated again.
        """
        data = self.model_dump()
        for name, value in values.items():
            if value is None:
                continue
            if name not in _OVERRIDE_FIELDS:
                raise KeyError(f"Unknown configuration option: {name}")
            section, key = _OVERRIDE_FIELDS[name]
            data[section][key] = value
        return type(self)(**data)
