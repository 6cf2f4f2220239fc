import argparse

import matplotlib.pyplot as plt

from config import Config
from page_replacement import POLICIES
from simulator import VirtualMemorySimulator

metrics = ['total_waits', 'total_instructions', 'free_pages_returned', 'clean_pages_returned',
           'dirty_pages_returned']
titles = ['Wait Cycles', 'Instructions', 'Free Pages Returned', 'Clean Pages Returned', 'Dirty Pages Returned']


def run_all(config, seed):
    results = {}
    for algorithm in POLICIES:
        simulator = VirtualMemorySimulator(config, algorithm=algorithm, random_seed=seed)
        simulator.run_simulation(verbose=False)
        results[algorithm] = simulator.results()
    return results


def plot_results(results, filename='policy_comparison.png', show=False):
    algorithms = list(results)
    fig, axes = plt.subplots(1, len(metrics), figsize=(4 * len(metrics), 5))
    fig.suptitle('Page Replacement Algorithm Comparison', fontsize=14, fontweight='bold')

    for ax, metric, title in zip(axes, metrics, titles):
        values = [results[alg][metric] for alg in algorithms]
        bars = ax.bar(range(len(algorithms)), values, 0.6)

        for bar in bars:
            height = bar.get_height()
            ax.text(bar.get_x() + bar.get_width()/2., height,
                    f'{int(height)}', ha='center', va='bottom', fontsize=9)

        ax.set_title(title)
        ax.set_xticks(range(len(algorithms)))
        ax.set_xticklabels(algorithms)
        ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()
    plt.savefig(filename, dpi=300, bbox_inches='tight')
    print(f"\nGraph saved as '{filename}'")
    if show:
        plt.show()
    plt.close(fig)
    return filename


def main():
    parser = argparse.ArgumentParser(description="Compare page replacement algorithms")
    parser.add_argument("-c", "--config", default="computer.properties")
    parser.add_argument("-s", "--seed", type=int, default=1)
    parser.add_argument("-o", "--output", default="policy_comparison.png")
    parser.add_argument("--show", action="store_true")
    args = parser.parse_args()

    print("Running simulations...")
    results = run_all(Config.from_config_file(args.config), args.seed)
    print(f"{'Algorithm':<10} " + " ".join(f"{t:<22}" for t in titles))
    for algorithm, r in results.items():
        print(f"{algorithm:<10} " + " ".join(f"{r[m]:<22}" for m in metrics))
    plot_results(results, args.output, show=args.show)


if __name__ == '__main__':
    main()
