"""Version 1 of the HolySpots Admin HTTP API."""
