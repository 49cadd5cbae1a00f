"""Small, dependency-free helpers shared across defi_codec."""
