"""Configuration: Redis connection and broker settings."""
