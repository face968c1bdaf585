"""
Tests Module: Unit Tests

Test Coverage:
    - Escaping (component and object key)
    - Address resolution (host, endpoint, default host)
    - Signing key derivation and cache eviction
    - Public and presigned URL generation against a reference signer
    - Storage adapter, configuration, errors, logging and CLI
"""
