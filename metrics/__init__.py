from metrics.hash import RunHash, tick_hash, trace_hash
from metrics.logger import JsonlLogger, read_ticks
from metrics.schema import SCHEMA_VERSION, TickData

__all__ = ["JsonlLogger", "RunHash", "SCHEMA_VERSION", "TickData", "read_ticks", "tick_hash", "trace_hash"]
