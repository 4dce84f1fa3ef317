"""neo-files infrastructure: storage, generators and HTTP middleware."""
