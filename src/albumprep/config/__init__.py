"""Configuration package: path policy, TOML config and fixed settings."""
