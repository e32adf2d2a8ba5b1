"""
Observability for the roll-call service: logging, metrics and HTTP endpoints.
"""
