"""ChatPPC: retrieval-augmented chat backend with an admin API."""

__version__ = "0.1.0"
