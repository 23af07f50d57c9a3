"""Configuration value objects for the ingestion layer."""
