"""Use-case functions called by the route handlers."""
