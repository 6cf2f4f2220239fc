import logging

from memory_manager import Statistics
from process import ProcessRuntime

log = logging.getLogger(__name__)

OS_CYCLES_PER_TICK = 50


class Scheduler:
    """
    Round-robin over the live processes, one step each per tick, on a single
    shared cycle clock. New processes arrive at random intervals until the
    configured number has been created.
    """
    def __init__(self, workload, policy="RAND"):
        self.workload = workload
        self.config = workload.config
        self.policy = policy
        self.processes = []
        self.stats = Statistics()
        self.current_cycle = 0
        self.cycles_till_next_process = 0
        self.next_pid = 0
        self.last_cycle_count = 0

    def tick(self):
        # in the beginning, make our first process
        if self.current_cycle == 0 and self.processes_created == 0 and self.config.processes_to_do > 0:
            self.processes.append(self._make_new_process())

        cycles_elapsed = self.current_cycle - self.last_cycle_count
        self.last_cycle_count = self.current_cycle

        # timing for launching new processes
        if self.processes_created < self.config.processes_to_do:
            if cycles_elapsed > self.cycles_till_next_process:
                self.cycles_till_next_process = self.workload.cycles_till_next_process()
                self.processes.append(self._make_new_process())
            else:
                self.cycles_till_next_process -= cycles_elapsed

        for process in self.processes:
            self.current_cycle += process.step(self.current_cycle)

        self._purge_done_processes()

        # the OS is working a bit as well
        self.current_cycle += OS_CYCLES_PER_TICK

    def _make_new_process(self):
        self.next_pid += 1
        cycles_to_go = self.workload.process_cycles_to_go()
        process = ProcessRuntime(self.workload,
                                 self.next_pid,
                                 cycles_to_go,
                                 self.workload.pages_memory_to_start(),
                                 self.config.quantum,
                                 policy=self.policy)
        self.stats.record_process_created()
        log.info("Process with PID %d created for %d cycles.", self.next_pid, cycles_to_go)
        return process

    def _purge_done_processes(self):
        still_running = []
        for process in self.processes:
            if process.is_done():
                log.info("Process with PID %d is done.", process.pid)
                self.stats.record_process_done(process)
            else:
                still_running.append(process)
        self.processes = still_running

    @property
    def live_processes(self):
        return tuple(self.processes)

    @property
    def processes_created(self):
        return self.stats.processes_created

    @property
    def processes_done(self):
        return self.stats.processes_done

    @property
    def total_waits(self):
        return self.stats.total_waits

    @property
    def total_instructions(self):
        return self.stats.total_instructions

    @property
    def free_pages_returned(self):
        return self.stats.free_pages_returned

    @property
    def clean_pages_returned(self):
        return self.stats.clean_pages_returned

    @property
    def dirty_pages_returned(self):
        return self.stats.dirty_pages_returned
