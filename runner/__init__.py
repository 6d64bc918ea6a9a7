"""Smoke runner that drives a live Todo API over HTTP."""
