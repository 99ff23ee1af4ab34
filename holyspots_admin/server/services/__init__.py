"""Dependency providers of the HolySpots Admin server."""
