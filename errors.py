class SimulationError(Exception):
    pass


class ConfigError(SimulationError, ValueError):
    pass


class PageTableError(SimulationError):
    pass


class NoVictimError(PageTableError):
    pass
