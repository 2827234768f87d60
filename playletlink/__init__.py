"""Match hot-ranking short dramas against a local share-link dataset."""

__version__ = "0.1.0"
