from .timers import PhaseTimings, Timer
from .metrics import efficiency, fit_time_stats, speedup, throughput

__all__ = [
    "Timer",
    "PhaseTimings",
    "speedup",
    "efficiency",
    "throughput",
    "fit_time_stats",
]
