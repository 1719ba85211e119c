"""Shared infrastructure: config, exceptions, logging, CLI."""
