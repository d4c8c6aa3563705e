from dataclasses import dataclass
from typing import Any, Mapping

from pyevo.core.exceptions import ConfigurationError


@dataclass
class BaseConfig:
    """
    Run options consumed by an optimizer driver.
    The strategy core never reads these; they only steer the generation loop
    and the diagnostic logger.
    """

    iterations: int = 1500
    """Maximum number of generations"""

    abstol: float = 1e-15
    """Stop once the best fitness is at or below this value"""

    seed: int | None = None
    """Seed for the random generator (None draws fresh entropy)"""

    # Diagnostics
    diag_sigma: bool = True
    """Log step-size values"""

    diag_paths: bool = True
    """Log evolution paths and their norms"""

    diag_eigen: bool = False
    """Log eigenvalues, condition number and covariance properties"""

    diag_pop: bool = False
    """Log the full survivor population"""

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.iterations < 1:
            raise ConfigurationError(f"iterations must be >= 1, got {self.iterations}")
        if self.abstol < 0:
            raise ConfigurationError(f"abstol must be >= 0, got {self.abstol}")

    def enable_all_diagnostics(self) -> None:
        self.diag_sigma = True
        self.diag_paths = True
        self.diag_eigen = True
        self.diag_pop = True

    @classmethod
    def from_defaults(cls, config: Any, **overrides: Any) -> "BaseConfig":
        """Build run options from an algorithm config's ``default_options()``."""
        defaults: Mapping[str, Any] = config.default_options()
        return cls(**{**defaults, **overrides})
