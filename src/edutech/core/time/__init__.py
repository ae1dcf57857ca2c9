from edutech.core.time.abc import Time
from edutech.core.time.real import RealTime

__all__ = ["RealTime", "Time"]
