from abc import ABC, abstractmethod

from errors import ConfigError, NoVictimError

# NRU clears reference bits after this many resident victim choices
RESET_INTERVAL = 10


class ReplacementPolicy(ABC):
    """
    Chooses which page gives up its frame when a process needs one.

    The page table and frame table are handed in on every call and never
    stored, so the choice always reflects the current occupancy.
    """
    name = None

    def __init__(self, rng):
        self.rng = rng
        self.free_pages_returned = 0
        self.clean_pages_returned = 0
        self.dirty_pages_returned = 0

    @property
    def evictions(self):
        return self.free_pages_returned + self.clean_pages_returned + self.dirty_pages_returned

    def select_victim(self, page_table, frames):
        """
        Pick the page whose frame will be reused. page_table is indexed by
        page number, frames holds True where the frame is in use.
        """
        # a page released by free_page still points at its (now unused) frame
        for page_num, entry in enumerate(page_table):
            if not entry.valid and not frames[entry.frame_number]:
                self.free_pages_returned += 1
                return page_num

        resident = [page_num for page_num, entry in enumerate(page_table) if entry.valid]
        if not resident:
            raise NoVictimError(f"{self.name}: no page holds a frame ({len(page_table)} pages, {len(frames)} frames)")

        victim = self._choose_resident(page_table, resident)
        if page_table[victim].modified:
            self.dirty_pages_returned += 1
        else:
            self.clean_pages_returned += 1
        return victim

    @abstractmethod
    def _choose_resident(self, page_table, resident):
        pass


class RandomReplacement(ReplacementPolicy):
    name = "RAND"

    def _choose_resident(self, page_table, resident):
        return self.rng.choice(resident)


class NRUReplacement(ReplacementPolicy):
    """
    Not recently used: replace the lowest numbered page of the first
    non-empty (referenced, modified) class.
    """
    name = "NRU"

    categories = [
        (False, False),  # unreferenced, clean
        (False, True),   # unreferenced, dirty
        (True, False),   # referenced, clean
        (True, True)     # referenced, dirty
    ]

    def __init__(self, rng, reset_interval=RESET_INTERVAL):
        super().__init__(rng)
        self.reset_interval = reset_interval
        self.choices = 0

    def _choose_resident(self, page_table, resident):
        victim = resident[0]
        for ref_bit, dirty_bit in self.categories:
            matches = [page_num for page_num in resident
                       if page_table[page_num].referenced == ref_bit and page_table[page_num].modified == dirty_bit]
            if matches:
                victim = matches[0]
                break

        # periodically forget references so the unreferenced classes fill up again
        self.choices += 1
        if self.choices % self.reset_interval == 0:
            for page_num in resident:
                page_table[page_num].referenced = False
        return victim


class ClockReplacement(ReplacementPolicy):
    """
    Second chance: the hand clears reference bits until it reaches an
    unreferenced resident page.
    """
    name = "CLOCK"

    def __init__(self, rng):
        super().__init__(rng)
        self.hand = 0

    def _choose_resident(self, page_table, resident):
        n_pages = len(page_table)
        # two sweeps at most, the first one clears every reference bit
        for _ in range(2 * n_pages):
            page_num = self.hand % n_pages
            self.hand = (page_num + 1) % n_pages
            entry = page_table[page_num]
            if not entry.valid:
                continue
            if entry.referenced:
                entry.referenced = False
                continue
            return page_num
        return resident[0]


POLICIES = {policy.name: policy for policy in (RandomReplacement, NRUReplacement, ClockReplacement)}


def make_policy(name, rng):
    try:
        policy_cls = POLICIES[name.upper()]
    except KeyError:
        raise ConfigError(f"Unknown page replacement policy: {name} (choose from {', '.join(POLICIES)})") from None
    return policy_cls(rng)
