from devbrag.core.ports.activity_source import ActivitySource
from devbrag.core.ports.clock import Clock
from devbrag.core.ports.logger import Logger
from devbrag.core.ports.summarizer import Summarizer

__all__ = [
    "Logger",
    "ActivitySource",
    "Summarizer",
    "Clock",
]
