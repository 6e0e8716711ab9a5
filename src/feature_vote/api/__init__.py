"""HTTP API for the Feature Vote service."""
