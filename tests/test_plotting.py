import numpy as np
from matplotlib.figure import Figure

from conftest import sphere
from pyevo import BaseConfig, CMAESConfig, CMAESOptimizer
from pyevo.plotting.convergence_plotter import ConvergencePlotter


def _result():
    options = BaseConfig(iterations=15, seed=0)
    options.enable_all_diagnostics()
    return CMAESOptimizer(
        sphere,
        initial_point=np.ones(3),
        config=CMAESConfig(mu=2, lambda_=6),
        options=options,
    ).optimize()


def test_plot_convergence_saves_figure(tmp_path):
    plotter = ConvergencePlotter()
    path = tmp_path / "convergence.png"

    fig = plotter.plot_convergence({"sphere": _result()}, save_path=path)

    assert isinstance(fig, Figure)
    assert path.exists()


def test_plot_cmaes_metrics(tmp_path):
    plotter = ConvergencePlotter()
    path = tmp_path / "metrics.png"

    fig = plotter.plot_cmaes_metrics(_result(), save_path=path)

    assert isinstance(fig, Figure)
    assert len(fig.axes) >= 4
    assert path.exists()
