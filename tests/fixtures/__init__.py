"""Shared test fixtures: in-memory repositories and a fake Redis client."""
