"""Integration tests exercising collections together with settings and logging."""
