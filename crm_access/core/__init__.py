"""Core configuration, logging, errors and enums."""
