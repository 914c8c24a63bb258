"""mailfilter: select messages from MBOX archives with a boolean filter language."""

__version__ = "0.3.0"
