"""
Shared plumbing for the point-of-sale apps: error taxonomy, health checks and
the local server command.
"""
