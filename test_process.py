import pytest

from conftest import DISK_CYCLES, FixedCostWorkload
from errors import SimulationError
from process import ProcessRuntime, ProcessState
from workload import Workload


class ScriptedWorkload(FixedCostWorkload):
    """Pins the program counter and memory pointer to fixed positions."""
    def __init__(self, config, pc, mp, free_page=False):
        super().__init__(config)
        self.pc = pc
        self.mp = mp
        self.free_page = free_page

    def new_pc_location(self, current_location):
        return self.pc

    def new_mp_location(self, current_location):
        return self.mp

    def ask_free_page(self):
        return self.free_page

    def cpu_cycles_processing(self):
        return 3


def loaded_process(workload, pages=2, quantum=100, cycles_to_go=10**6):
    process = ProcessRuntime(workload, 1, cycles_to_go, pages, quantum)
    for page in range(pages):
        process.translator.access_page(page)
    process.pages_loaded_so_far = pages
    process.loaded = True
    return process


def test_loading_touches_one_page_per_fault(fixed_workload):
    process = ProcessRuntime(fixed_workload, 1, 10**6, 3, 100)
    assert process.state is ProcessState.LOADING

    assert process.step(0) == 20
    assert process.pages_loaded_so_far == 1
    assert process.wait_remaining == DISK_CYCLES
    assert process.total_instructions == 20

    # disk still busy
    assert process.step(500) == 1
    assert process.wait_remaining == 500
    assert process.total_instructions == 20

    assert process.step(1600) == 20
    assert process.pages_loaded_so_far == 2
    assert process.translator.evictions == 0


def test_finishes_loading_with_fresh_positions(fixed_workload):
    process = ProcessRuntime(fixed_workload, 1, 10**6, 1, 1)
    process.step(0)
    process.step(5000)
    assert process.loaded
    assert 0.0 <= process.program_counter < 0.75
    assert 0.75 <= process.memory_pointer < 1.0


def test_zero_budget_done_after_first_burst(fixed_workload):
    process = ProcessRuntime(fixed_workload, 1, 0, 2, 100)
    process.step(0)
    assert process.total_instructions > 0
    assert process.is_done()
    assert process.state is ProcessState.DONE
    with pytest.raises(SimulationError):
        process.step(100)


def test_page_fault_parks_process(config):
    workload = ScriptedWorkload(config, pc=0.1, mp=0.9)
    process = loaded_process(workload)
    process.translator.free_page(0)

    assert process.step(0) == 20
    assert process.wait_remaining == DISK_CYCLES + 1
    assert process.total_wait_cycles == DISK_CYCLES + 1
    assert process.state is ProcessState.WAITING

    # resume: one plain processing step, then both pages hit the TLB
    assert process.step(2000) == 3 + 5 * 20
    assert process.wait_remaining == 0
    assert not process.just_resumed_from_wait
    assert process.state is ProcessState.RUNNING


def test_far_move_frees_old_page(config):
    workload = ScriptedWorkload(config, pc=0.1, mp=0.1, free_page=True)
    process = loaded_process(workload)
    process.memory_pointer = 0.9

    assert process.step(0) == 100
    assert not process.translator.page_table[1].valid
    assert process.translator.frames == (True, False)


def test_relative_to_page(fixed_workload):
    process = loaded_process(fixed_workload, pages=4)
    assert process.relative_to_page(0.0) == 0
    assert process.relative_to_page(0.5) == 2
    assert process.relative_to_page(0.99) == 3
    assert process.relative_to_page(1.0) == 4
    assert process.relative_to_page(1.7) == 4


def test_instructions_never_decrease(config):
    workload = Workload(config, seed=7)
    process = ProcessRuntime(workload, 1, 20000, 4, config.quantum)
    cycle = 0
    last = 0
    while not process.is_done():
        cycle += process.step(cycle) + 50
        assert process.total_instructions >= last
        last = process.total_instructions
    assert process.total_instructions > process.cycles_to_go


class WalkingWorkload(ScriptedWorkload):
    """Every translation misses the TLB and the walks cost the scripted amounts."""
    def __init__(self, config, walk_costs):
        super().__init__(config, pc=0.1, mp=0.9)
        self.tlb_hit = False
        self.walk_costs = list(walk_costs)

    def page_table_cycles(self):
        return self.walk_costs.pop(0)


def test_burst_costing_exactly_threshold_parks(config):
    process = loaded_process(WalkingWorkload(config, [250, 250]))
    assert process.step(0) == 20
    assert process.wait_remaining == 500
    assert process.total_wait_cycles == 500
    assert process.state is ProcessState.WAITING


def test_burst_just_below_threshold_keeps_running(config):
    process = loaded_process(WalkingWorkload(config, [249, 250]))
    assert process.step(0) == 499 + 3
    assert process.wait_remaining == 0
    assert process.total_wait_cycles == 0
    assert process.state is ProcessState.RUNNING
