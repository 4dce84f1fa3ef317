"""HTTP API of the file manager."""
