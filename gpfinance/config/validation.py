"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..models.schedule import MutationOperator

if TYPE_CHECKING:
    from .options import RunConfig


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates run configuration parameters."""

    @staticmethod
    def validate_rate(field: str, value: Any) -> list[ValidationError]:
        """A rate must be a number in [0, 1]."""
        if not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
            return [ValidationError(
                field=field,
                message="Must be a number between 0 and 1",
                value=value
            )]
        return []

    @staticmethod
    def validate_positive_int(field: str, value: Any) -> list[ValidationError]:
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            return [ValidationError(
                field=field,
                message="Must be a positive integer",
                value=value
            )]
        return []

    @staticmethod
    def validate_run_config(config: "RunConfig") -> list[ValidationError]:
        """Validate a complete run configuration."""
        errors = []

        errors.extend(ConfigValidator.validate_positive_int("generations", config.generations))
        errors.extend(ConfigValidator.validate_positive_int("population", config.population_size))

        # Rate schedules
        errors.extend(ConfigValidator.validate_rate("crossover.initial", config.crossover.initial))
        errors.extend(ConfigValidator.validate_rate("crossover.final", config.crossover.final))
        errors.extend(ConfigValidator.validate_rate("restart.initial", config.restart.initial))
        errors.extend(ConfigValidator.validate_rate("restart.final", config.restart.final))
        errors.extend(ConfigValidator.validate_rate("restart.fraction", config.restart_fraction))

        for operator, schedule in zip(MutationOperator, config.mutation):
            name = operator.name.lower()
            errors.extend(ConfigValidator.validate_rate(f"mutation.{name}.initial", schedule.initial))
            errors.extend(ConfigValidator.validate_rate(f"mutation.{name}.final", schedule.final))

        # Tree shape
        tree = config.tree
        errors.extend(ConfigValidator.validate_positive_int("tree.min_init_depth", tree.min_init_depth))
        if tree.max_init_depth < tree.min_init_depth:
            errors.append(ValidationError(
                field="tree.max_init_depth",
                message="Must not be smaller than tree.min_init_depth",
                value=tree.max_init_depth
            ))
        if tree.max_depth < tree.max_init_depth:
            errors.append(ValidationError(
                field="tree.max_depth",
                message="Must not be smaller than tree.max_init_depth",
                value=tree.max_depth
            ))

        return errors
