"""Shared domain layer: canonical models and enums."""
