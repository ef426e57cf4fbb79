from .sources import CountingSource, Probe, collect, describe, results_of, throw_on
from .timeline import Consumed, Produced, consume, fast_consumer, fast_producer, load, pattern, produce, to_events

__all__ = (
    "Consumed",
    "CountingSource",
    "Probe",
    "Produced",
    "collect",
    "consume",
    "describe",
    "fast_consumer",
    "fast_producer",
    "load",
    "pattern",
    "produce",
    "results_of",
    "throw_on",
    "to_events",
)
