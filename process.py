import enum
import logging

from errors import SimulationError
from memory_manager import AddressTranslator

log = logging.getLogger(__name__)

PAGE_FAULT_THRESHOLD = 500
FREE_PAGE_CYCLES = 5
FREE_PAGE_DISTANCE = 0.1


class ProcessState(enum.Enum):
    LOADING = "loading"
    RUNNING = "running"
    WAITING = "waiting"
    DONE = "done"


class ProcessRuntime:
    """
    One simulated program.

    The process first touches every page it was granted, then runs in bursts
    of up to one quantum. Program counter and memory pointer are relative
    positions in the virtual address space; each step of a burst moves both
    and accesses the pages they land on. A burst that costs a page fault
    parks the process until the disk wait has passed.
    """
    def __init__(self, workload, pid, cycles_to_go, pages_memory_to_start, quantum, policy="RAND"):
        self.workload = workload
        self.pid = pid
        self.cycles_to_go = cycles_to_go
        self.pages_memory_to_start = pages_memory_to_start
        self.quantum = quantum

        self.total_instructions = 0
        self.total_wait_cycles = 0
        self.wait_remaining = 0
        self.last_cycle_seen = 0

        self.program_counter = 0.0
        self.memory_pointer = 0.0
        self.loaded = False
        self.pages_loaded_so_far = 0
        self.just_resumed_from_wait = False

        self.translator = AddressTranslator(workload, pages_memory_to_start, policy=policy)

    @property
    def state(self):
        if self.is_done():
            return ProcessState.DONE
        if not self.loaded:
            return ProcessState.LOADING
        if self.is_waiting():
            return ProcessState.WAITING
        return ProcessState.RUNNING

    def is_waiting(self):
        return self.wait_remaining > 0

    def is_done(self):
        return self.total_instructions > self.cycles_to_go

    def step(self, current_cycle):
        """Give the process one scheduler turn and return the cycles it used."""
        if self.is_done():
            raise SimulationError(f"PID {self.pid} stepped after it was done")
        log.debug("PID %d: Cycle %d of %d", self.pid, current_cycle, self.cycles_to_go)

        cycles_elapsed = current_cycle - self.last_cycle_seen
        self.last_cycle_seen = current_cycle

        # still waiting on the disk, nothing to do
        if self.wait_remaining > cycles_elapsed:
            self.wait_remaining -= cycles_elapsed
            return 1
        if self.wait_remaining > 0:
            self.wait_remaining = 0
            self.just_resumed_from_wait = True

        burst_cycles = 0
        while burst_cycles < self.quantum and self.wait_remaining < PAGE_FAULT_THRESHOLD:
            if not self.loaded:
                burst_cycles += self._load_process()
            else:
                burst_cycles += self._advance_process()

        self.total_instructions += burst_cycles
        return burst_cycles

    def _load_process(self):
        if self.pages_loaded_so_far < self.pages_memory_to_start:
            log.debug("PID %d: Loaded page %d", self.pid, self.pages_loaded_so_far)
            self.wait_remaining += self.translator.access_page(self.pages_loaded_so_far)
            self.pages_loaded_so_far += 1
        else:
            self.program_counter = self.workload.new_pc_location(0)
            self.memory_pointer = self.workload.new_mp_location(0)
            self.loaded = True
            log.debug("PID %d: Finished loading", self.pid)
        return self.workload.cpu_cycles_per_disk_request()

    def _advance_process(self):
        if self.just_resumed_from_wait:
            self.just_resumed_from_wait = False
            return self.workload.cpu_cycles_processing()

        old_mp = self.memory_pointer
        self.program_counter = self.workload.new_pc_location(self.program_counter)
        self.memory_pointer = self.workload.new_mp_location(self.memory_pointer)

        free_page_cycles = 0
        if abs(old_mp - self.memory_pointer) > FREE_PAGE_DISTANCE and self.workload.ask_free_page():
            old_page = self.relative_to_page(old_mp)
            # the table may have grown since, so the old position can map past its end
            if old_page < self.translator.page_count:
                self.translator.free_page(old_page)
                free_page_cycles = FREE_PAGE_CYCLES

        load_cycles = self.translator.access_page(self.relative_to_page(self.program_counter))
        load_cycles += self.translator.access_page(self.relative_to_page(self.memory_pointer))

        if load_cycles >= PAGE_FAULT_THRESHOLD:
            # page fault, wait for the disk and yield
            self.wait_remaining += load_cycles
            self.total_wait_cycles += load_cycles
            return self.workload.cpu_cycles_per_disk_request()

        return load_cycles + free_page_cycles + self.workload.cpu_cycles_processing()

    def relative_to_page(self, relative_reference):
        virtual_size = self.translator.virtual_size()
        page_size = self.translator.page_size()
        if relative_reference < 1.0:
            return int(virtual_size * relative_reference / page_size)
        return int(virtual_size / page_size)

    @property
    def free_pages_returned(self):
        return self.translator.free_pages_returned

    @property
    def clean_pages_returned(self):
        return self.translator.clean_pages_returned

    @property
    def dirty_pages_returned(self):
        return self.translator.dirty_pages_returned

    def __repr__(self):
        return f"<ProcessRuntime pid={self.pid} {self.state.value} {self.total_instructions}/{self.cycles_to_go}>"
