from errors import ConfigError

# key -> type, in the order they are reported
PARAMETERS = {
    "numberPages": int,
    "pageSize": int,
    "processesToDo": int,
    "averageProcessCycles": float,
    "averageProcessCycleStdDev": float,
    "pagesMemoryToStart": int,
    "averageTimeBetweenProcessStarts": int,
    "quantum": int,
    "memoryPointerRelocationSpread": float,
    "cpuCyclesPerDiskRequest": int,
    "waitCyclesPerDiskRequest": int,
    "waitCyclesPerDiskRequestSpread": int,
    "probabilityMemoryJump": float,
    "cpuCyclesProcessing": int,
    "probabilityFreePage": float,
    "tlbHitRate": float,
    "waitCyclesPerPageTableLookup": float,
    "waitCyclesPerPageTableSpread": float,
}

PROBABILITIES = ("probabilityMemoryJump", "probabilityFreePage", "tlbHitRate")
POSITIVE = ("numberPages", "pageSize", "processesToDo", "averageProcessCycles", "pagesMemoryToStart",
            "averageTimeBetweenProcessStarts", "quantum", "cpuCyclesProcessing")
NON_NEGATIVE = ("averageProcessCycleStdDev", "memoryPointerRelocationSpread", "cpuCyclesPerDiskRequest",
                "waitCyclesPerDiskRequest", "waitCyclesPerDiskRequestSpread", "waitCyclesPerPageTableLookup",
                "waitCyclesPerPageTableSpread")


def parse_value(key, raw, kind):
    """Convert a raw property string or number, naming the key on failure."""
    if isinstance(raw, str):
        raw = raw.strip()
    elif kind is int and isinstance(raw, float) and not raw.is_integer():
        raise ConfigError(f"{key}: expected int, got {raw!r}")
    try:
        return kind(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{key}: expected {kind.__name__}, got {raw!r}") from None


class Config:
    """Typed, validated simulation parameters."""
    def __init__(self, values, source=None):
        missing = [key for key in PARAMETERS if key not in values]
        if missing:
            raise ConfigError(f"Missing configuration parameter(s): {', '.join(missing)}")
        self.values = {key: values[key] for key in PARAMETERS}
        self.source = source
        self.validate()

    @classmethod
    def from_dict(cls, mapping, source=None):
        values = {}
        for key, kind in PARAMETERS.items():
            if key not in mapping:
                continue
            raw = mapping[key]
            values[key] = parse_value(key, raw, kind)
        return cls(values, source=source)

    @classmethod
    def from_config_file(cls, filepath):
        # java properties style: key=value or key: value, # and ! start comments
        with open(filepath) as infile:
            raw_lines = [ln.rstrip("\n") for ln in infile]

        raw = {}
        for ln in raw_lines:
            line = ln.strip()
            if not line or line.startswith(("#", "!")):
                continue
            if "=" in line:
                key, val = line.split("=", 1)
            elif ":" in line:
                key, val = line.split(":", 1)
            else:
                raise ConfigError(f"{filepath}: cannot parse line {line!r}")
            raw[key.strip()] = val.strip()

        return cls.from_dict(raw, source=filepath)

    def validate(self):
        for key in PROBABILITIES:
            if not 0.0 <= self.values[key] <= 1.0:
                raise ConfigError(f"{key} must be between 0 and 1.")
        for key in POSITIVE:
            if self.values[key] <= 0:
                raise ConfigError(f"{key} must be positive.")
        for key in NON_NEGATIVE:
            if self.values[key] < 0:
                raise ConfigError(f"{key} must not be negative.")

    def get_int(self, key):
        return int(self.values[key])

    def get_float(self, key):
        return float(self.values[key])

    @property
    def number_pages(self):
        return self.get_int("numberPages")

    @property
    def page_size(self):
        return self.get_int("pageSize")

    @property
    def processes_to_do(self):
        return self.get_int("processesToDo")

    @property
    def average_process_cycles(self):
        return self.get_float("averageProcessCycles")

    @property
    def average_process_cycle_std_dev(self):
        return self.get_float("averageProcessCycleStdDev")

    @property
    def pages_memory_to_start(self):
        return self.get_int("pagesMemoryToStart")

    @property
    def average_time_between_process_starts(self):
        return self.get_int("averageTimeBetweenProcessStarts")

    @property
    def quantum(self):
        return self.get_int("quantum")

    @property
    def memory_pointer_relocation_spread(self):
        return self.get_float("memoryPointerRelocationSpread")

    @property
    def cpu_cycles_per_disk_request(self):
        return self.get_int("cpuCyclesPerDiskRequest")

    @property
    def wait_cycles_per_disk_request(self):
        return self.get_int("waitCyclesPerDiskRequest")

    @property
    def wait_cycles_per_disk_request_spread(self):
        return self.get_int("waitCyclesPerDiskRequestSpread")

    @property
    def probability_memory_jump(self):
        return self.get_float("probabilityMemoryJump")

    @property
    def cpu_cycles_processing(self):
        return self.get_int("cpuCyclesProcessing")

    @property
    def probability_free_page(self):
        return self.get_float("probabilityFreePage")

    @property
    def tlb_hit_rate(self):
        return self.get_float("tlbHitRate")

    @property
    def wait_cycles_per_page_table_lookup(self):
        return self.get_float("waitCyclesPerPageTableLookup")

    @property
    def wait_cycles_per_page_table_spread(self):
        return self.get_float("waitCyclesPerPageTableSpread")

    def __str__(self):
        print_str = ""
        if self.source:
            print_str += f"Configuration read from {self.source}.\n"
        print_str += f"Each page contains {self.page_size} bytes.\n"
        print_str += f"Processes start with up to {self.pages_memory_to_start} pages of memory.\n"
        print_str += f"{self.processes_to_do} processes of about {self.average_process_cycles:.0f} cycles each.\n"
        print_str += f"A new process starts every {self.average_time_between_process_starts} cycles on average.\n"
        print_str += f"Scheduling quantum is {self.quantum} cycles.\n"
        print_str += f"TLB hit rate is {self.tlb_hit_rate:.2f}.\n"
        print_str += f"A disk request takes about {self.wait_cycles_per_disk_request} cycles.\n"
        return print_str
