import hashlib

# Changing this invalidates every stored feed id.
HASH_LENGTH = 10


def hash_url(value: str) -> str:
    """Return the stable id for a feed url: the first 10 hex chars of its SHA-256."""
    return hashlib.sha256(value.encode('utf-8')).hexdigest()[:HASH_LENGTH]
