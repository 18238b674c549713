"""Configuration layer — rootfile discovery, layered TOML loading, CLI settings."""
