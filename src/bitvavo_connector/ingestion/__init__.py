"""Ingestion layer: request shaping, signing, transport and adapters."""
