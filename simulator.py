import argparse
import logging
import os
import sys

from config import Config
from errors import ConfigError, SimulationError
from page_replacement import POLICIES
from scheduler import Scheduler
from workload import Workload

log = logging.getLogger(__name__)


class VirtualMemorySimulator:

    def __init__(self, config, algorithm='RAND', random_seed=None, max_cycles=None):
        self.config = config
        self.algorithm = algorithm.upper()
        if self.algorithm not in POLICIES:
            raise ConfigError(f"Unknown algorithm: {algorithm}")
        self.workload = Workload(config, seed=random_seed)
        self.scheduler = Scheduler(self.workload, policy=self.algorithm)
        self.max_cycles = max_cycles

    def run_simulation(self, verbose=True):
        if verbose:
            print(f"\n{'='*60}")
            print(f"Running {self.algorithm} algorithm for {self.config.processes_to_do} processes")
            print(f"{'='*60}")

        while self.scheduler.processes_done != self.config.processes_to_do:
            if self.max_cycles is not None and self.scheduler.current_cycle > self.max_cycles:
                raise SimulationError(f"Simulation did not finish within {self.max_cycles} cycles "
                                      f"({self.scheduler.processes_done} of {self.config.processes_to_do} done)")
            self.scheduler.tick()

        stats = self.scheduler.stats
        if verbose:
            print(f"\nResults:")
            print(stats)
            print(f"Total cycles: {self.scheduler.current_cycle}")
            print(f"{'='*60}\n")
        return stats

    def results(self):
        return {
            'total_instructions': self.scheduler.total_instructions,
            'total_waits': self.scheduler.total_waits,
            'total_cycles': self.scheduler.current_cycle,
            'free_pages_returned': self.scheduler.free_pages_returned,
            'clean_pages_returned': self.scheduler.clean_pages_returned,
            'dirty_pages_returned': self.scheduler.dirty_pages_returned,
            'processes_done': self.scheduler.processes_done,
        }

    def write_results(self, output_dir='.'):
        """
        Write results_<ALGORITHM>.txt with the policy, the configuration it
        ran with and the totals.
        """
        result_file_name = os.path.join(output_dir, f"results_{self.algorithm}.txt")
        with open(result_file_name, 'w') as out:
            out.write("[PageReplacement]\n")
            out.write(f"{POLICIES[self.algorithm].__name__}\n\n")

            out.write("[Configuration]\n")
            if self.config.source and os.path.exists(self.config.source):
                with open(self.config.source) as config_file:
                    for line in config_file:
                        out.write(line.rstrip("\n") + "\n")
            else:
                for key, value in self.config.values.items():
                    out.write(f"{key}={value}\n")
            out.write("\n")

            r = self.results()
            out.write("[Results]\n")
            out.write(f"Total instructions: {r['total_instructions']}\n")
            out.write(f"Total waits: {r['total_waits']}\n")
            out.write(f"Total cycles: {r['total_cycles']}\n")
            out.write(f"Total free pages returned: {r['free_pages_returned']}\n")
            out.write(f"Total clean pages returned: {r['clean_pages_returned']}\n")
            out.write(f"Total dirty pages returned: {r['dirty_pages_returned']}\n")
            out.write(f"Processes done: {r['processes_done']}\n")
        log.info("Results written to %s", result_file_name)
        return result_file_name


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Virtual memory and process timing simulator"
    )
    parser.add_argument(
        "-c", "--config",
        default="computer.properties",
        help="Path to config file (default: %(default)s)",
    )
    parser.add_argument(
        "-p", "--policy",
        default="RAND",
        choices=sorted(POLICIES),
        type=str.upper,
        help="Page replacement algorithm (default: %(default)s)",
    )
    parser.add_argument(
        "-s", "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible run",
    )
    parser.add_argument(
        "-o", "--output-dir",
        default=".",
        help="Directory for the results file (default: %(default)s)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log process creation and completion",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if not os.path.exists(args.config):
        print(f"error: config file not found: {args.config}", file=sys.stderr)
        sys.exit(2)

    try:
        config = Config.from_config_file(args.config)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)

    if args.verbose:
        print(config)
    simulator = VirtualMemorySimulator(config, algorithm=args.policy, random_seed=args.seed)
    simulator.run_simulation()
    simulator.write_results(args.output_dir)


if __name__ == '__main__':
    main()
