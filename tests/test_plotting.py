import matplotlib

matplotlib.use("Agg")

from dock_nav.config import SimConfig  # noqa: E402
from dock_nav.sim.runner import run_episode  # noqa: E402
from dock_nav.sim.world import Arena  # noqa: E402
from dock_nav.viz.plotting import save_episode_plot  # noqa: E402


def test_save_episode_plot_writes_png(tmp_path, specs) -> None:
    sim = SimConfig(resolution_m=0.1, max_steps=3, seed=0)
    result = run_episode(specs, sim)
    out = tmp_path / "episode.png"
    save_episode_plot(Arena.from_config(sim), result, str(out), status={"outcome": result.outcome})
    assert out.exists()
    assert out.stat().st_size > 0
