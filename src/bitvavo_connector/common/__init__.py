"""Common helpers shared across layers."""
