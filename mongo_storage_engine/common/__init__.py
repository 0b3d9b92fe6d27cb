"""Common configuration, logging, exceptions and utilities."""
