"""
Bitvavo connector.
Translates Bitvavo REST payloads into the canonical market/currency schema
and shapes authenticated requests against the Bitvavo v2 API.

Modules:
- ingestion: Request shaping, signing, transport and the Bitvavo adapter
- shared: Canonical models and enums
- infrastructure: Logging
- config: Typed configuration state
"""
