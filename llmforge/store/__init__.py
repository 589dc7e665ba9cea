"""Persistence for the transformer library."""

from llmforge.store.library_store import InMemoryLibraryStore, LibraryStore, LocalLibraryStore

__all__ = ["LibraryStore", "LocalLibraryStore", "InMemoryLibraryStore"]
