import pytest

from config import Config
from workload import Workload

SMALL_CONFIG = {
    "numberPages": 64,
    "pageSize": 4096,
    "processesToDo": 3,
    "averageProcessCycles": 5000,
    "averageProcessCycleStdDev": 1000,
    "pagesMemoryToStart": 4,
    "averageTimeBetweenProcessStarts": 2000,
    "quantum": 100,
    "memoryPointerRelocationSpread": 200,
    "cpuCyclesPerDiskRequest": 20,
    "waitCyclesPerDiskRequest": 800,
    "waitCyclesPerDiskRequestSpread": 100,
    "probabilityMemoryJump": 0.1,
    "cpuCyclesProcessing": 10,
    "probabilityFreePage": 0.1,
    "tlbHitRate": 0.9,
    "waitCyclesPerPageTableLookup": 20,
    "waitCyclesPerPageTableSpread": 5,
}

DISK_CYCLES = 1000
WALK_CYCLES = 20


class FixedCostWorkload(Workload):
    """Workload with constant memory costs and a switchable TLB."""
    def __init__(self, config, seed=0, tlb_hit=True):
        super().__init__(config, seed=seed)
        self.tlb_hit = tlb_hit

    def disk_cycles(self):
        return DISK_CYCLES

    def page_table_cycles(self):
        return WALK_CYCLES

    def is_tlb_hit(self):
        return self.tlb_hit


class StubRng:
    """Returns the same value from random() forever."""
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def make_config():
    def _make_config(**overrides):
        values = dict(SMALL_CONFIG)
        values.update(overrides)
        return Config.from_dict(values)
    return _make_config


@pytest.fixture
def config(make_config):
    return make_config()


@pytest.fixture
def workload(config):
    return Workload(config, seed=1234)


@pytest.fixture
def fixed_workload(config):
    return FixedCostWorkload(config)
