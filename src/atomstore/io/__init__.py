"""Adapters from parsed structure data to AtomCollections."""

from atomstore.io.biotite import from_atom_array, load_atom_collection

__all__ = [
  "from_atom_array",
  "load_atom_collection",
]
