from errors import PageTableError
from page_replacement import ReplacementPolicy, make_policy
from page_table import PageTableEntry

CODE_PAGE_PROBABILITY = 0.5


class AddressTranslator:
    """
    Virtual to physical translation for one process.

    The page table grows as new pages are touched; the frame table is fixed
    at the number of frames the process was granted when it started.
    """
    def __init__(self, workload, pages_memory_to_start, policy="RAND"):
        self.workload = workload
        self._page_table = []
        self._frames = [False] * pages_memory_to_start
        if isinstance(policy, ReplacementPolicy):
            self.policy = policy
        else:
            self.policy = make_policy(policy, workload.rng)

    def access_page(self, page_number):
        """Access memory on a virtual page and return the wait cycles."""
        if page_number < 0:
            raise PageTableError(f"Negative page number {page_number}")

        if page_number >= len(self._page_table):
            if page_number > len(self._page_table):
                raise PageTableError(f"Page {page_number} skips ahead of the page table "
                                     f"({len(self._page_table)} pages)")
            # still filling the pre-reserved frames, page number == frame number
            if page_number < len(self._frames) and not self._frames[page_number]:
                entry = PageTableEntry(page_number)
                entry.bind(page_number)
                self._frames[page_number] = True
                self._page_table.append(entry)
                return self.workload.disk_cycles()
            victim = self.policy.select_victim(self._page_table, self._frames)
            return self.swap_for_new(victim, page_number)

        entry = self._page_table[page_number]
        if not entry.valid:
            victim = self.policy.select_victim(self._page_table, self._frames)
            wait_cycles = self.swap_for_existing(victim, page_number)
        elif self.workload.is_tlb_hit():
            wait_cycles = 1
        else:
            wait_cycles = self.workload.page_table_cycles()
        entry.access(self.workload.rng)
        return wait_cycles

    def free_page(self, page_number):
        """Release a page and its frame. Costs are left to the caller."""
        entry = self._entry(page_number)
        if entry.valid:
            self._frames[entry.frame_number] = False
        entry.invalidate()

    def swap_for_existing(self, victim_page, target_page):
        """Evict victim_page and load target_page from disk into its frame."""
        out_entry = self._entry(victim_page)
        in_entry = self._entry(target_page)
        frame_number = out_entry.frame_number
        wait_cycles = 0

        if out_entry.modified:
            wait_cycles += self.workload.disk_cycles()
        out_entry.invalidate()

        wait_cycles += self.workload.disk_cycles()
        in_entry.bind(frame_number)
        self._frames[frame_number] = True
        return wait_cycles

    def swap_for_new(self, victim_page, new_page):
        """
        Evict victim_page and hand its frame to a page that has never been
        loaded. Half of new pages are code read from disk, the rest is freshly
        allocated (and therefore already dirty) data.
        """
        out_entry = self._entry(victim_page)
        frame_number = out_entry.frame_number
        if new_page == len(self._page_table):
            self._page_table.append(PageTableEntry(frame_number))
        new_entry = self._entry(new_page)
        wait_cycles = 0

        if out_entry.modified:
            wait_cycles += self.workload.disk_cycles()
        out_entry.invalidate()
        self._frames[frame_number] = False

        if self.workload.rng.random() < CODE_PAGE_PROBABILITY:
            wait_cycles += self.workload.disk_cycles()
            new_entry.bind(frame_number, modified=False)
        else:
            new_entry.bind(frame_number, modified=True)
        self._frames[frame_number] = True
        return wait_cycles

    def _entry(self, page_number):
        if not 0 <= page_number < len(self._page_table):
            raise PageTableError(f"No page {page_number} in page table of {len(self._page_table)} pages")
        return self._page_table[page_number]

    def virtual_size(self):
        return self.page_size() * len(self._page_table)

    def page_size(self):
        return self.workload.config.page_size

    @property
    def page_table(self):
        return tuple(self._page_table)

    @property
    def frames(self):
        return tuple(self._frames)

    @property
    def page_count(self):
        return len(self._page_table)

    @property
    def frame_count(self):
        return len(self._frames)

    @property
    def resident_count(self):
        return sum(1 for entry in self._page_table if entry.valid)

    @property
    def evictions(self):
        return self.policy.evictions

    @property
    def free_pages_returned(self):
        return self.policy.free_pages_returned

    @property
    def clean_pages_returned(self):
        return self.policy.clean_pages_returned

    @property
    def dirty_pages_returned(self):
        return self.policy.dirty_pages_returned


class Statistics:
    def __init__(self):
        self.processes_created = 0
        self.processes_done = 0
        self.total_waits = 0
        self.total_instructions = 0
        self.free_pages_returned = 0
        self.clean_pages_returned = 0
        self.dirty_pages_returned = 0

    def record_process_created(self):
        self.processes_created += 1

    def record_process_done(self, process):
        self.processes_done += 1
        self.total_waits += process.total_wait_cycles
        self.total_instructions += process.total_instructions
        self.free_pages_returned += process.free_pages_returned
        self.clean_pages_returned += process.clean_pages_returned
        self.dirty_pages_returned += process.dirty_pages_returned

    def __str__(self):
        return (f"Total instructions: {self.total_instructions}\n"
                f"Total waits: {self.total_waits}\n"
                f"Total free pages returned: {self.free_pages_returned}\n"
                f"Total clean pages returned: {self.clean_pages_returned}\n"
                f"Total dirty pages returned: {self.dirty_pages_returned}\n"
                f"Processes done: {self.processes_done}")
