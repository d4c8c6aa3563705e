from pathlib import Path
import sys
import warnings

import matplotlib.pyplot as plt
import numpy as np
from loguru import logger

from pyevo import AlgorithmChoice, AlgorithmFactory, BaseConfig, CMAESConfig
from pyevo.plotting.convergence_plotter import ConvergencePlotter
from pyevo.utils.benchmark_functions import Ellipsoid, Rosenbrock, Sphere
from pyevo.utils.boundary_handlers import BoundaryHandlerType

warnings.filterwarnings("ignore", category=SyntaxWarning, module="opfunu")

plt.ioff()
plt.switch_backend("Agg")

logger.remove()
logger.add(sys.stderr, level="INFO")
logger.enable("pyevo")


def run_optimization_example(dimensions: int = 10, seed: int = 42):
    """Run CMA-ES on a few benchmark functions and plot the results."""

    config = CMAESConfig(mu=5, lambda_=10, sigma0=2.0)
    options = BaseConfig(iterations=2000, abstol=1e-10, seed=seed)
    options.enable_all_diagnostics()

    results = {}
    for opt_func in (Sphere(dimensions), Ellipsoid(dimensions), Rosenbrock(dimensions)):
        name = type(opt_func).__name__
        initial_point = np.random.default_rng(seed).uniform(-3.0, 3.0, dimensions)

        print(f"Starting {AlgorithmChoice.CMAES.value} on {name} ({dimensions}D)")
        print(f"Configuration: {config}")
        print(f"Initial point value: {opt_func(initial_point):.6e}")

        optimizer = AlgorithmFactory.create_optimizer(
            algorithm=AlgorithmChoice.CMAES,
            func=opt_func,
            initial_point=initial_point,
            config=config,
            options=options,
            boundary_strategy=BoundaryHandlerType.CLAMP,
            lower_bounds=-10.0,
            upper_bounds=10.0,
        )
        result = optimizer.optimize()
        results[name] = result

        print(f"Best fitness: {result.best_fitness:.6e}")
        print(f"Function evaluations: {result.evaluations}")
        print(f"Message: {result.message}\n")

    output_dir = Path("plots")
    output_dir.mkdir(exist_ok=True)

    plotter = ConvergencePlotter()
    plotter.plot_convergence(
        results,
        save_path=output_dir / "convergence_comparison.png",
        title=f"CMA-ES Convergence ({dimensions}D)",
    )
    for name, result in results.items():
        plotter.plot_cmaes_metrics(result, save_path=output_dir / f"cmaes_{name.lower()}.png")

    print(f"Saved plots to: {output_dir.absolute()}")


if __name__ == "__main__":
    run_optimization_example()
