"""neo-files application layer."""
