"""Configuration — TOML discovery, settings, logging setup."""
