"""Reader for per-topic CSV logs of the ALFA fault-detection dataset."""

__version__ = "0.1.0"
