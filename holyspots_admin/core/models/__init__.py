"""Core models and schemas shared by the services and the API."""
