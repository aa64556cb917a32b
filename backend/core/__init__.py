"""Core infrastructure: logging, correlation IDs and Sentry monitoring."""
