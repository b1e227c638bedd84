"""Backend providers behind the router."""
