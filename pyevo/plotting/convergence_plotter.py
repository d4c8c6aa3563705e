from typing import Optional, Union
from pathlib import Path
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
import numpy as np
import seaborn as sns

from pyevo.algorithms.choices import AlgorithmChoice
from pyevo.core.base_optimizer import OptimizationResult
from pyevo.logging.cmaes_logger import CMAESLogData
from pyevo.utils.helpers import delete_inf_nan

# Smallest value drawn on a log axis; exact zeros would be dropped.
LOG_FLOOR = 1e-300


def _log_safe(values) -> np.ndarray:
    return np.maximum(delete_inf_nan(np.asarray(values, dtype=float)), LOG_FLOOR)


class ConvergencePlotter:
    """Convergence and adaptation plots for CMA-ES runs."""

    def __init__(self, style: str = "seaborn-v0_8", figsize: tuple = (12, 8)):
        """
        Args:
            style: Matplotlib style to use
            figsize: Default figure size
        """
        self.style = style
        self.figsize = figsize
        plt.style.use(style)
        sns.set_palette("husl")

    def plot_convergence(
        self,
        results: dict[str, OptimizationResult],
        save_path: Optional[Union[str, Path]] = None,
        title: str = "Convergence",
        show_evaluations: bool = True,
    ) -> Figure:
        """
        Plot best-so-far fitness of one or more runs on a log scale.

        Args:
            results: Mapping of run label to result
            save_path: Path to save the plot
            title: Plot title
            show_evaluations: x-axis as evaluations instead of iterations

        Returns:
            Figure object
        """
        fig, ax = plt.subplots(figsize=self.figsize)

        for label, result in results.items():
            log_data = result.diagnostic
            if not log_data.best_fitness:
                continue
            x_data = log_data.evaluations if show_evaluations else log_data.iteration
            ax.semilogy(
                x_data,
                _log_safe(log_data.best_fitness),
                label=f"{label} (final: {result.best_fitness:.2e})",
                linewidth=2,
                alpha=0.8,
            )

        ax.set_xlabel("Function Evaluations" if show_evaluations else "Iterations")
        ax.set_ylabel("Best Fitness")
        ax.set_title(title)
        ax.legend()
        ax.grid(True, alpha=0.3)
        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches="tight")

        return fig

    def plot_cmaes_metrics(
        self,
        result: OptimizationResult[CMAESLogData],
        save_path: Optional[Union[str, Path]] = None,
    ) -> Figure:
        """Four panels: fitness, step size, path norms and eigenvalue spectrum."""
        if result.algorithm != AlgorithmChoice.CMAES:
            raise ValueError(f"Expected a CMA-ES result, got {result.algorithm}")

        log_data = result.diagnostic
        fig, axes = plt.subplots(2, 2, figsize=(16, 12))
        ax_fit, ax_sigma, ax_paths, ax_eigen = axes.flatten()
        evals = log_data.evaluations

        if log_data.best_fitness:
            ax_fit.semilogy(evals, _log_safe(log_data.best_fitness), "b-", linewidth=2, label="Best")
            if log_data.median_fitness:
                ax_fit.semilogy(
                    evals, _log_safe(log_data.median_fitness), "r:", linewidth=1.5, label="Median"
                )
            if log_data.worst_fitness:
                ax_fit.semilogy(
                    evals, _log_safe(log_data.worst_fitness), "g--", linewidth=1.5, label="Worst"
                )
            self._decorate(ax_fit, "Fitness (log scale)", "Survivor Fitness")
            ax_fit.legend()

        if log_data.sigma:
            ax_sigma.semilogy(evals, _log_safe(log_data.sigma), "orange", linewidth=2)
            self._decorate(ax_sigma, "σ (log scale)", "Step-Size Evolution")

        if log_data.s_norm and log_data.s_sigma_norm:
            ax_paths.plot(evals, log_data.s_norm, "b-", linewidth=2, label="||s||")
            ax_paths.plot(evals, log_data.s_sigma_norm, "r--", linewidth=2, label="||s_σ||")
            self._decorate(ax_paths, "Path Norm", "Evolution Path Norms")
            ax_paths.legend()

        if log_data.eigenvalues:
            eigenvalues = np.array(log_data.eigenvalues)
            for i in range(min(5, eigenvalues.shape[1])):
                ax_eigen.semilogy(
                    evals[: len(eigenvalues)],
                    _log_safe(eigenvalues[:, i]),
                    alpha=0.7,
                    linewidth=1.5,
                    label=f"λ_{i + 1}",
                )
            self._decorate(ax_eigen, "Eigenvalues (log scale)", "Eigenvalue Spectrum (first 5)")
            ax_eigen.legend()

        fig.suptitle("CMA-ES Diagnostics", fontsize=16)
        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches="tight")

        return fig

    @staticmethod
    def _decorate(ax: Axes, ylabel: str, title: str) -> None:
        ax.set_xlabel("Function Evaluations")
        ax.set_ylabel(ylabel)
        ax.set_title(title)
        ax.grid(True, alpha=0.3)
