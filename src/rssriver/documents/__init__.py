"""Feed entry to search document mapping."""

from .service import entry_to_json, map_entry

__all__ = ["entry_to_json", "map_entry"]
