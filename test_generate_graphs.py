import matplotlib

matplotlib.use("Agg")

from generate_graphs import metrics, plot_results, run_all  # noqa: E402


def test_run_all_covers_every_policy(config):
    results = run_all(config, seed=2)
    assert sorted(results) == ['CLOCK', 'NRU', 'RAND']
    for r in results.values():
        assert set(metrics) <= set(r)
        assert r['processes_done'] == config.processes_to_do


def test_plot_results_saves_png(tmp_path):
    results = {alg: {m: i + 1 for i, m in enumerate(metrics)} for alg in ['RAND', 'NRU']}
    filename = plot_results(results, str(tmp_path / "comparison.png"))
    assert (tmp_path / "comparison.png").stat().st_size > 0
    assert filename.endswith("comparison.png")
