"""Observability: structured logging, diagnostics, metrics.

Uses structlog for logging and Prometheus for metrics.
"""
