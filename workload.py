import random

MIN_PAGE_TABLE_CYCLES = 5
MIN_DISK_CYCLES = 500


class Workload:
    """
    Every random draw the simulation makes: process sizes and arrivals,
    program counter and memory pointer walks, and the cost of each memory
    operation. One seeded generator feeds all of them.
    """
    def __init__(self, config, rng=None, seed=None):
        self.config = config
        self.rng = rng if rng is not None else random.Random(seed)

    # -----------------------------
    # Processes
    # -----------------------------
    def process_cycles_to_go(self):
        average = self.config.average_process_cycles
        cycles = int(self.rng.gauss(0.0, 1.0) * self.config.average_process_cycle_std_dev + average)
        if cycles < 0.2 * average:
            cycles = int(average)
        return cycles

    def pages_memory_to_start(self):
        return self.rng.randint(1, self.config.pages_memory_to_start)

    def cycles_till_next_process(self):
        return self.rng.randrange(self.config.average_time_between_process_starts)

    # -----------------------------
    # Program counter / memory pointer
    # -----------------------------
    def new_pc_location(self, current_location):
        if self.rng.random() < self.config.probability_memory_jump or current_location == 0:
            return self._jump_pc()
        current_location += self._relocation() * (1 + self.rng.gauss(0.0, 1.0))
        if current_location < 0:
            current_location = self._jump_pc()
        return current_location

    def new_mp_location(self, current_location):
        if self.rng.random() < self.config.probability_memory_jump or current_location == 0:
            return self._jump_mp()
        current_location += self._relocation() * self.rng.gauss(0.0, 1.0)
        if current_location < 0:
            current_location = self._jump_mp()
        return current_location

    def _relocation(self):
        return self.config.memory_pointer_relocation_spread / self.config.page_size

    def _jump_pc(self):
        # code lives in the lower three quarters
        return 0.75 * self.rng.random()

    def _jump_mp(self):
        return 0.75 + 0.25 * self.rng.random()

    def ask_free_page(self):
        return self.rng.random() < self.config.probability_free_page

    # -----------------------------
    # Costs in cycles
    # -----------------------------
    def cpu_cycles_per_disk_request(self):
        return self.config.cpu_cycles_per_disk_request

    def cpu_cycles_processing(self):
        return 2 + self.rng.randrange(self.config.cpu_cycles_processing)

    def is_tlb_hit(self):
        return self.rng.random() < self.config.tlb_hit_rate

    def page_table_cycles(self):
        wait_cycles = int(self.config.wait_cycles_per_page_table_lookup
                          + self.rng.gauss(0.0, 1.0) * self.config.wait_cycles_per_page_table_spread)
        return max(wait_cycles, MIN_PAGE_TABLE_CYCLES)

    def disk_cycles(self):
        wait_cycles = int(self.config.wait_cycles_per_disk_request
                          + self.rng.gauss(0.0, 1.0) * self.config.wait_cycles_per_disk_request_spread)
        return max(wait_cycles, MIN_DISK_CYCLES)
