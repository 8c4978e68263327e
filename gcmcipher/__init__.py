"""AES-GCM authenticated encryption (gcmcipher.gcm) and the GHASH universal hash (gcmcipher.ghash)."""

__version__ = "0.1.0"