"""
Settings for the lexical simplifier.

Settings come from a YAML file (``.lexsimplify.yml``), then environment
variables prefixed ``LEXSIMPLIFY_``, then command-line options. They hold the
data file paths and the initial metric/policy selection.
"""

import logging
import os
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from .engine.configuration import ReplacementConfiguration, SelectionPolicy
from .engine.errors import ConfigurationError
from .metrics.similarity import lookup

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = [".lexsimplify.yml", ".lexsimplify.yaml", "lexsimplify.yml", "lexsimplify.yaml"]
ENV_PREFIX = "LEXSIMPLIFY_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SimplifierSettings:
    """User settings for a simplification session."""

    # Data files
    embeddings_path: Optional[str] = None
    common_words_path: Optional[str] = None
    output_path: str = "./output.txt"

    # Replacement
    metrics: List[str] = field(default_factory=lambda: ["cosine"])
    policy: str = "most_similar"
    seed: Optional[int] = None

    log_level: str = "WARNING"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimplifierSettings":
        """Create from a (possibly partial) dict; unknown keys are ignored."""
        names = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - names)
        if unknown:
            logger.warning(f"Ignoring unknown settings: {', '.join(unknown)}")

        kwargs = {k: v for k, v in data.items() if k in names}
        if isinstance(kwargs.get("metrics"), str):
            kwargs["metrics"] = _split_list(kwargs["metrics"])
        return cls(**kwargs)

    def unknown_metrics(self) -> List[str]:
        """Metric names the registry does not recognise; these are dropped."""
        return [name for name in self.metrics if lookup(name) is None]

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the settings are usable.

        Unknown metric names are only a problem when no valid name is left.
        """
        issues = []

        unknown = self.unknown_metrics()
        if not self.metrics or len(unknown) == len(self.metrics):
            if unknown:
                issues.append(f"unknown metrics: {', '.join(unknown)}")
            issues.append("at least one valid metric is required")

        try:
            SelectionPolicy.parse(self.policy)
        except ConfigurationError as e:
            issues.append(e.message)

        if self.seed is not None and not isinstance(self.seed, int):
            issues.append(f"seed must be an integer, got {self.seed!r}")

        if str(self.log_level).upper() not in LOG_LEVELS:
            issues.append(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level}")

        return issues

    def missing_paths(self) -> List[str]:
        """Names of the required data files that are not set."""
        missing = []
        if not self.embeddings_path:
            missing.append("embeddings_path")
        if not self.common_words_path:
            missing.append("common_words_path")
        return missing

    def to_replacement_configuration(self) -> ReplacementConfiguration:
        """Build the engine configuration from these settings."""
        config = ReplacementConfiguration(policy=SelectionPolicy.parse(self.policy))
        config.select_metrics(self.metrics)
        return config

    # --- files ---

    def save_to_file(self, file_path: Union[str, Path]) -> None:
        """Save settings to a YAML file."""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def load_from_file(cls, file_path: Union[str, Path]) -> "SimplifierSettings":
        """Load settings from a YAML file."""
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        if data is not None and not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a mapping: {file_path}")

        return cls.from_dict(data or {})

    @classmethod
    def find_and_load(cls, start_path: Union[str, Path] = ".") -> "SimplifierSettings":
        """Find a settings file in ``start_path`` or its parents, else defaults."""
        current = Path(start_path).resolve()

        while True:
            for name in CONFIG_FILE_NAMES:
                config_path = current / name
                if config_path.exists():
                    logger.debug(f"Using settings from {config_path}")
                    return cls.load_from_file(config_path)
            if current == current.parent:
                break
            current = current.parent

        return cls()

    # --- environment ---

    def apply_environment(self, environ: Optional[Dict[str, str]] = None) -> "SimplifierSettings":
        """
        Apply ``LEXSIMPLIFY_*`` overrides in place.

        Raises:
            ConfigurationError: for a value that cannot be converted
        """
        environ = os.environ if environ is None else environ

        env_mappings = {
            "EMBEDDINGS": ("embeddings_path", str),
            "COMMON_WORDS": ("common_words_path", str),
            "OUTPUT": ("output_path", str),
            "METRICS": ("metrics", _split_list),
            "POLICY": ("policy", str),
            "SEED": ("seed", int),
            "LOG_LEVEL": ("log_level", str),
        }

        for suffix, (attr, convert) in env_mappings.items():
            env_var = ENV_PREFIX + suffix
            value = environ.get(env_var)
            if value is None:
                continue
            try:
                setattr(self, attr, convert(value))
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid environment variable {env_var}={value}: {e}",
                    setting=attr,
                    value=value,
                ) from e
            logger.debug(f"Applied env override: {attr}")

        return self


def _split_list(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class ConfigManager:
    """Loads, saves and displays the settings file."""

    DEFAULT_CONFIG_FILE = ".lexsimplify.yml"

    def __init__(self, config_path: Optional[Path] = None, console: Optional[Console] = None):
        """
        Args:
            config_path: Settings file; found by searching upward when None
            console: Console used by ``display``
        """
        self.console = console or Console()
        self.config_path = Path(config_path) if config_path else None
        self._settings: Optional[SimplifierSettings] = None

    @property
    def path(self) -> Path:
        """File that ``save`` writes to."""
        return self.config_path or Path(self.DEFAULT_CONFIG_FILE)

    def load(self, use_environment: bool = True) -> SimplifierSettings:
        """
        Load settings from the file (or defaults) and apply env overrides.

        Returns:
            Loaded or default settings
        """
        if self._settings is not None:
            return self._settings

        if self.config_path is not None:
            if self.config_path.exists():
                settings = SimplifierSettings.load_from_file(self.config_path)
            else:
                logger.warning(f"Settings file {self.config_path} not found, using defaults")
                settings = SimplifierSettings()
        else:
            settings = SimplifierSettings.find_and_load(Path.cwd())

        if use_environment:
            settings.apply_environment()

        self._settings = settings
        return settings

    def save(self, settings: Optional[SimplifierSettings] = None) -> Path:
        """Write settings to ``self.path`` and return that path."""
        settings = settings or self._settings or SimplifierSettings()
        settings.save_to_file(self.path)
        self._settings = settings
        logger.info(f"Saved settings to {self.path}")
        return self.path

    def update(self, **kwargs) -> SimplifierSettings:
        """
        Update settings fields.

        Raises:
            ConfigurationError: for an unknown field name
        """
        settings = self.load(use_environment=False) if self._settings is None else self._settings
        for key, value in kwargs.items():
            if not hasattr(settings, key):
                raise ConfigurationError(f"Unknown setting: {key}", setting=key, value=value)
            setattr(settings, key, value)
        return settings

    def reset(self) -> SimplifierSettings:
        """Replace the in-memory settings with defaults."""
        self._settings = SimplifierSettings()
        return self._settings

    def display(self, settings: Optional[SimplifierSettings] = None) -> None:
        """Print settings as syntax-highlighted YAML in a panel."""
        settings = settings or self._settings or self.load()

        yaml_str = yaml.dump(settings.to_dict(), default_flow_style=False, sort_keys=False)
        syntax = Syntax(yaml_str, "yaml", theme="monokai", line_numbers=False)
        panel = Panel(
            syntax,
            title="[bold cyan]Current Configuration[/bold cyan]",
            border_style="cyan"
        )

        self.console.print(panel)


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_path: Optional[Path] = None) -> ConfigManager:
    """Get the global config manager, replacing it when a new path is given."""
    global _config_manager

    if _config_manager is None or (config_path and Path(config_path) != _config_manager.config_path):
        _config_manager = ConfigManager(config_path)

    return _config_manager
