"""
Genetic programming run coordinator.

Owns the population and drives the fixed-count generational loop:
Measure → Reproduction selection → Crossover → Mutation → Survivor selection
"""

import random
from typing import Any, Mapping, Optional, Sequence

from .config.defaults import DefaultConfig
from .config.options import RunConfig, parse_options
from .data.security import Security
from .errors import StateTransitionError, StrategyContractError
from .logging.config import get_run_logger, log_generation_report
from .models.individual import Individual, best_individual, sort_by_descending_fitness
from .models.run import GenerationSummary, RunState, SurvivorPool
from .strategies.registry import StrategySet, build_strategies

# Generations between best-fitness reports
RESOLUTION = 50

logger = get_run_logger(__name__)


class GeneticProgram:
    """
    Generational evolutionary search over trading rules.

    The run always executes exactly ``config.generations`` generations;
    there is no convergence check. Per generation g:

    1. measure the population at g
    2. snapshot it (clones) as the previous generation
    3. progress = g / generations
    4. choose |P| // 2 reproduction candidates
    5. crossover the candidates, measure the offspring
    6. mutate the offspring, measure the mutants
    7. survivor selection over previous generation + mutants (optionally
       also the raw offspring) back to the configured population size
    """

    def __init__(
        self,
        config: Optional[RunConfig] = None,
        securities: Sequence[Security] = (),
        strategies: Optional[StrategySet] = None,
        rng: Optional[random.Random] = None
    ) -> None:
        self.logger = logger
        self.config = config or RunConfig.from_defaults()
        self.securities = tuple(securities)

        self.seed = self.config.seed
        if rng is None:
            if self.seed is None:
                self.seed = random.randrange(2 ** 32)
            rng = random.Random(self.seed)
        # An injected rng without a configured seed has no seed to report
        self.rng = rng
        self.strategies = strategies or build_strategies(self.config, self.rng)

        self.population: list[Individual] = []
        self.state = RunState.UNINITIALIZED
        self.generation = 0
        self.history: list[GenerationSummary] = []

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, Any],
        securities: Sequence[Security] = (),
        defaults: Optional[DefaultConfig] = None
    ) -> "GeneticProgram":
        """Build a run from a string option mapping."""
        return cls(parse_options(options, defaults), securities)

    def run(self) -> list[Individual]:
        """
        Execute the full run.

        Returns:
            The final population

        Raises:
            StateTransitionError: The run was already started
            StrategyContractError: A strategy broke its size contract
        """
        if self.state is not RunState.UNINITIALIZED:
            raise StateTransitionError(
                "A GeneticProgram can only be run once",
                current_state=self.state.value,
                attempted_transition=RunState.RUNNING.value,
            )

        self._transition(RunState.RUNNING)
        self.logger.info(
            "run_started",
            generations=self.config.generations,
            population_size=self.config.population_size,
            analysis_type=self.config.analysis_type.value,
            securities=len(self.securities),
            seed=self.seed,
        )

        population = self.strategies.initialization.init(
            self.config.population_size, self.config.analysis_type
        )
        self.population = self._check_size(
            population, self.strategies.initialization, self.config.population_size
        )

        for generation in range(self.config.generations):
            self.generation = generation
            self.population = self.step(self.population, generation)

            if (generation + 1) % RESOLUTION == 0:
                log_generation_report(self.logger, generation + 1, self.best_fitness)

        self._transition(RunState.COMPLETE)
        self.logger.info(
            "run_complete",
            generations=self.config.generations,
            best_fitness=self.best_fitness,
        )
        return self.population

    def step(self, population: list[Individual], generation: int) -> list[Individual]:
        """Advance ``population`` by one generation and return the survivors."""
        strategies = self.strategies

        self.measure(population, generation)

        previous = [individual.clone() for individual in population]

        progress = generation / self.config.generations

        candidates = self._check(
            strategies.reproduction_selection.select(population, len(population) // 2),
            strategies.reproduction_selection,
        )

        offspring = self._check_size(
            strategies.crossover.crossover(candidates, progress), strategies.crossover, len(candidates)
        )
        self.measure(offspring, generation)

        mutated = self._check_size(
            strategies.mutation.mutate(offspring, progress), strategies.mutation, len(offspring)
        )
        self.measure(mutated, generation)

        pool = previous + mutated
        if self.config.survivor_pool is SurvivorPool.ALL:
            pool += offspring

        survivors = strategies.population_selection.select_dynamic(
            pool, self.config.population_size, progress
        )
        survivors = self._check_size(
            survivors, strategies.population_selection, self.config.population_size
        )
        # Restarted individuals arrive unmeasured
        self.measure(survivors, generation)

        self._record(generation, survivors)
        return survivors

    def measure(self, individuals: Sequence[Individual], generation: int) -> None:
        """Measure every individual against the run's securities."""
        for individual in individuals:
            individual.measure(generation, self.securities)

    @property
    def best(self) -> Optional[Individual]:
        return best_individual(self.population)

    @property
    def best_fitness(self) -> Optional[float]:
        best = self.best
        return best.fitness if best else None

    def population_fitnesses(self) -> list[Optional[float]]:
        """Fitness of the current population, best first."""
        return [individual.fitness for individual in sort_by_descending_fitness(self.population)]

    def _transition(self, new_state: RunState) -> None:
        self.logger.debug("Run state transition", from_state=self.state.value, to_state=new_state.value)
        self.state = new_state

    def _record(self, generation: int, population: Sequence[Individual]) -> None:
        fitnesses = [i.fitness for i in population if i.fitness is not None]
        summary = GenerationSummary(
            generation=generation,
            best_fitness=max(fitnesses) if fitnesses else None,
            mean_fitness=sum(fitnesses) / len(fitnesses) if fitnesses else None,
            worst_fitness=min(fitnesses) if fitnesses else None,
            population_size=len(population),
        )
        self.history.append(summary)
        self.logger.debug(
            "Generation complete",
            generation=generation,
            best_fitness=summary.best_fitness,
            mean_fitness=summary.mean_fitness,
        )

    @staticmethod
    def _check(result: Optional[list[Individual]], strategy: Any) -> list[Individual]:
        if result is None:
            raise StrategyContractError(
                f"Strategy {_strategy_name(strategy)} returned no population",
                strategy_name=_strategy_name(strategy),
            )
        return result

    @classmethod
    def _check_size(cls, result: Optional[list[Individual]], strategy: Any, expected: int) -> list[Individual]:
        result = cls._check(result, strategy)
        if len(result) != expected:
            raise StrategyContractError(
                f"Strategy {_strategy_name(strategy)} returned {len(result)} individuals, "
                f"expected {expected}",
                strategy_name=_strategy_name(strategy),
                expected_size=expected,
                actual_size=len(result),
            )
        return result


def _strategy_name(strategy: Any) -> str:
    return getattr(strategy, "name", type(strategy).__name__)
