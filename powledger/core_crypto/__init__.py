# Core Crypto Module
"""
Hashing primitives used across powledger:
- SHA-256 digests
- Digest-as-integer conversion for target comparison
"""
