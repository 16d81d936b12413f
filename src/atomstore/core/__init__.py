"""Atom storage, selections and residue views."""
