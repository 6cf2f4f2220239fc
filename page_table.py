DIRTY_PROBABILITY = 0.2


class PageTableEntry:
    def __init__(self, frame_number):
        self.frame_number = frame_number
        self.valid = False
        self.referenced = False
        self.modified = False

    def access(self, rng):
        """Touch the page; roughly one access in five is a write."""
        self.referenced = True
        if rng.random() < DIRTY_PROBABILITY:
            self.modified = True

    def bind(self, frame_number, modified=False):
        self.frame_number = frame_number
        self.valid = True
        self.referenced = True
        self.modified = modified

    def invalidate(self):
        self.valid = False
        self.referenced = False
        self.modified = False

    def __repr__(self):
        flags = ("V" if self.valid else "-") + ("R" if self.referenced else "-") + ("M" if self.modified else "-")
        return f"[{flags}|{self.frame_number}]"
