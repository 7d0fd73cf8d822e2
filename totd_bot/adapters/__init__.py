"""Adapters: Discord, Trackmania, storage and web."""
