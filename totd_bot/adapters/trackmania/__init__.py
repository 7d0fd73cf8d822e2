"""Trackmania (Nadeo) data provider."""
