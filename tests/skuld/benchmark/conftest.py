import pytest
import matplotlib.pyplot as plt
import humanize
from matplotlib.ticker import FuncFormatter

from skuld import StrategyName


session_key = pytest.StashKey[pytest.Session]()

STRATEGY_STYLES = {
    "scan": dict(marker='o', linestyle='-'),
    "load": dict(marker='s', linestyle='-'),
    "load-once": dict(marker='^', linestyle='--'),
    "waste": dict(marker='v', linestyle=':'),
}


def pytest_sessionstart(session):
    session.config.stash[session_key] = session


def pytest_benchmark_generate_json(config, benchmarks, machine_info):
    session = config.stash.get(session_key, None)
    session.stash["strategy_benchmarks"] = benchmarks


def pytest_sessionfinish(session, exitstatus):
    benchmarks_data = session.stash.get("strategy_benchmarks", None)
    if not benchmarks_data:
        return

    # strategy -> {file size -> mean seconds}
    times: dict[str, dict[int, float]] = {}
    for bench in benchmarks_data:
        if "test_benchmark_strategy" not in bench["name"]:
            continue
        params = bench["params"]
        times.setdefault(StrategyName(params["strategy_name"]).value, {})[params["payload_size"]] = bench["stats"].mean

    baseline = times.get("scan")
    if not baseline:
        return

    sizes = sorted(baseline.keys())

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 8), height_ratios=[2, 1])

    # Top plot: time per strategy (log scale)
    for name, by_size in times.items():
        ax1.loglog(sizes, [by_size.get(s, float('nan')) for s in sizes], label=name, **STRATEGY_STYLES.get(name, {}))
    ax1.set_xlabel('File Size')
    ax1.set_ylabel('Time (seconds)')
    ax1.set_title('Byte Histogram Strategy Benchmark')
    ax1.grid(True)
    ax1.legend()
    ax1.xaxis.set_major_formatter(FuncFormatter(lambda x, pos: humanize.naturalsize(x)))
    ax1.set_xlim(min(sizes), max(sizes))

    # Bottom plot: time relative to scan (linear scale)
    all_ratios = []
    for name, by_size in times.items():
        if name == "scan":
            continue
        ratios = [baseline[s] / by_size[s] if s in by_size else float('nan') for s in sizes]
        all_ratios.extend(r for r in ratios if r == r)
        ax2.semilogx(sizes, ratios, linewidth=2, label=name, **STRATEGY_STYLES.get(name, {}))
    ax2.axhline(y=1.0, color='gray', linestyle='--', alpha=0.7, label='scan')
    ax2.set_xlabel('File Size')
    ax2.set_ylabel('Speedup vs scan (x)')
    ax2.set_title('Speedup Ratio vs scan')
    ax2.grid(True)
    ax2.legend()
    ax2.xaxis.set_major_formatter(FuncFormatter(lambda x, pos: humanize.naturalsize(x)))
    ax2.set_xlim(min(sizes), max(sizes))
    if all_ratios:
        ax2.set_ylim(0, max(all_ratios + [1.0]) * 1.1)

    plt.tight_layout()
    fig.savefig('strategy_benchmark_plot.png', dpi=150)
    plt.close(fig)
    print("Benchmark plot saved to strategy_benchmark_plot.png")
