"""Configuration loader with 3-tier option precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..errors import ConfigurationError
from .defaults import DefaultConfig, get_default_config
from .options import RunConfig, parse_options

RUN_FILE = "run.yaml"


class RunFileLoader(yaml.SafeLoader):
    """
    SafeLoader that leaves numbers as text.

    Run options are strings, and YAML 1.1 would otherwise read an unquoted
    rate pair such as ``1:0`` as the base-60 integer 60.
    """


RunFileLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers
            if tag not in ("tag:yaml.org,2002:int", "tag:yaml.org,2002:float")]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages run configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Union[str, Path]] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_options(self) -> dict[str, str]:
        """Load run options from ``run.yaml``; empty when the file is absent."""
        run_file = self.config_dir / RUN_FILE

        if not run_file.exists():
            return {}

        try:
            with open(run_file) as f:
                raw = yaml.load(f, Loader=RunFileLoader)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Could not parse {run_file}: {e}", context={"file": str(run_file)}
            ) from e

        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"{run_file} must contain a mapping of option names to values",
                context={"file": str(run_file)},
            )

        return {str(key): self._to_option_value(value) for key, value in raw.items()}

    def merge_options(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, str]:
        """
        Merge options with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. Options from run.yaml
        3. Built-in defaults (lowest priority, applied by parse_options)
        """
        options = self.load_file_options()

        if overrides:
            options.update({key: self._to_option_value(value) for key, value in overrides.items()})

        return options

    def load(self, overrides: Optional[dict[str, Any]] = None) -> RunConfig:
        """Load, merge, parse and validate the run configuration."""
        return parse_options(self.merge_options(overrides), self.defaults)

    @staticmethod
    def _to_option_value(value: Any) -> str:
        """YAML lists such as ``[0.6, 0.4]`` become ``"0.6:0.4"``."""
        if isinstance(value, (list, tuple)):
            return ":".join(str(v) for v in value)
        return str(value)
