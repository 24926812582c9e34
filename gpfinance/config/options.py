"""
Run option parsing.

Options arrive as a flat mapping of option name to string value, the way a
command line or a job description supplies them. Missing options keep the
defaults, unrecognized ones are ignored, and values that do not parse are
fatal.
"""

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from ..errors import InvalidConfigurationError, OptionParseError
from ..logging.config import get_logger
from ..models.run import AnalysisType, SurvivorPool
from ..models.schedule import NUM_MUTATIONS, MutationSchedule, RateSchedule
from .defaults import DefaultConfig, TreeParams, get_default_config
from .validation import ConfigValidator

logger = get_logger(__name__)

OPTION_KEYS = frozenset({
    "type",
    "generations",
    "population",
    "crossoverRate",
    "mutationRateStart",
    "mutationRateEnd",
    "populationSelection",
    "reproductionSelection",
    "restartRate",
    "survivorPool",
    "seed",
})


@dataclass(frozen=True)
class RunConfig:
    """Immutable configuration of a single GP run."""
    generations: int
    population_size: int
    analysis_type: AnalysisType
    crossover: RateSchedule
    mutation: MutationSchedule
    restart: RateSchedule
    restart_fraction: float
    population_selection: str
    reproduction_selection: str
    survivor_pool: SurvivorPool
    tree: TreeParams
    seed: Optional[int] = None

    @classmethod
    def from_defaults(cls, defaults: Optional[DefaultConfig] = None) -> "RunConfig":
        """Build the configuration used when no options are given."""
        defaults = defaults or get_default_config()
        return cls(
            generations=defaults.run.generations,
            population_size=defaults.run.population,
            analysis_type=AnalysisType.from_option(defaults.run.analysis_type),
            crossover=RateSchedule(defaults.crossover.initial, defaults.crossover.final),
            mutation=MutationSchedule.from_rates(defaults.mutation.initial, defaults.mutation.final),
            restart=RateSchedule(defaults.restart.initial, defaults.restart.final),
            restart_fraction=defaults.restart.fraction,
            population_selection=defaults.strategies.population_selection,
            reproduction_selection=defaults.strategies.reproduction_selection,
            survivor_pool=SurvivorPool(defaults.run.survivor_pool),
            tree=defaults.tree,
            seed=defaults.run.seed,
        )


def parse_options(
    options: Mapping[str, Any],
    defaults: Optional[DefaultConfig] = None
) -> RunConfig:
    """
    Parse a run option mapping into a validated RunConfig.

    Args:
        options: Option name to value (values are converted with ``str``)
        defaults: Defaults for options that are absent

    Returns:
        Validated run configuration

    Raises:
        OptionParseError: A value could not be parsed
        InvalidConfigurationError: Parsed values failed validation
    """
    config = RunConfig.from_defaults(defaults)
    changes: dict[str, Any] = {}

    for key in options:
        if key not in OPTION_KEYS:
            logger.debug("Ignoring unrecognized option", option=key)

    if "type" in options:
        changes["analysis_type"] = AnalysisType.from_option(str(options["type"]))

    if "generations" in options:
        changes["generations"] = _parse_int(options, "generations")

    if "population" in options:
        changes["population_size"] = _parse_int(options, "population")

    if "crossoverRate" in options:
        initial, final = _parse_pair(options, "crossoverRate")
        changes["crossover"] = RateSchedule(initial, final)

    if "restartRate" in options:
        initial, final = _parse_pair(options, "restartRate")
        changes["restart"] = RateSchedule(initial, final)

    if "mutationRateStart" in options or "mutationRateEnd" in options:
        initial = list(config.mutation.initial)
        final = list(config.mutation.final)
        if "mutationRateStart" in options:
            _overlay(initial, _parse_rates(options, "mutationRateStart"), "mutationRateStart", options)
        if "mutationRateEnd" in options:
            _overlay(final, _parse_rates(options, "mutationRateEnd"), "mutationRateEnd", options)
        changes["mutation"] = MutationSchedule.from_rates(initial, final)

    if "populationSelection" in options:
        changes["population_selection"] = str(options["populationSelection"])

    if "reproductionSelection" in options:
        changes["reproduction_selection"] = str(options["reproductionSelection"])

    if "survivorPool" in options:
        raw = str(options["survivorPool"])
        try:
            changes["survivor_pool"] = SurvivorPool(raw)
        except ValueError:
            raise OptionParseError(
                f"survivorPool must be one of {[p.value for p in SurvivorPool]}, got '{raw}'",
                option="survivorPool",
                raw_value=raw,
            ) from None

    if "seed" in options:
        changes["seed"] = _parse_int(options, "seed")

    config = replace(config, **changes)

    errors = ConfigValidator.validate_run_config(config)
    if errors:
        error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
        raise InvalidConfigurationError(
            "Run configuration validation failed: " + "; ".join(error_msgs),
            errors=errors,
        )

    return config


def _parse_int(options: Mapping[str, Any], key: str) -> int:
    raw = str(options[key])
    try:
        return int(raw)
    except ValueError:
        raise OptionParseError(
            f"{key} must be an integer, got '{raw}'", option=key, raw_value=raw
        ) from None


def _parse_rates(options: Mapping[str, Any], key: str) -> list[float]:
    raw = str(options[key])
    try:
        return [float(part) for part in raw.split(":")]
    except ValueError:
        raise OptionParseError(
            f"{key} must be colon-separated numbers, got '{raw}'", option=key, raw_value=raw
        ) from None


def _parse_pair(options: Mapping[str, Any], key: str) -> tuple[float, float]:
    rates = _parse_rates(options, key)
    if len(rates) != 2:
        raise OptionParseError(
            f"{key} must have the form 'initial:final', got '{options[key]}'",
            option=key,
            raw_value=str(options[key]),
        )
    return rates[0], rates[1]


def _overlay(target: list[float], rates: list[float], key: str, options: Mapping[str, Any]) -> None:
    """Replace the leading entries of ``target``; the rest keep their defaults."""
    if len(rates) > NUM_MUTATIONS:
        raise OptionParseError(
            f"{key} accepts at most {NUM_MUTATIONS} rates, got {len(rates)}",
            option=key,
            raw_value=str(options[key]),
        )
    target[:len(rates)] = rates
