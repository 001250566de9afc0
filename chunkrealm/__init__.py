"""chunkrealm: chunk-streamed world core for a top-down tile action RPG."""

__version__ = "0.1.0"
