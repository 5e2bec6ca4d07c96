"""Filesystem and logging helpers shared by the entry points."""
