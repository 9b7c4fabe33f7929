"""Bundled track data resources."""
