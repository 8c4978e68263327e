"""AES in Galois/Counter Mode (NIST SP 800-38D) authenticated encryption."""

from __future__ import annotations

import hmac
import secrets

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .ghash import BLOCK_SIZE, GHash

A_MAX = 1 << 36
"""Maximum length of associated data."""

P_MAX = 1 << 36
"""Maximum length of plaintext."""

C_MAX = (1 << 36) + 16
"""Maximum length of ciphertext."""

TAG_SIZE = 16
AES_KEY_SIZES = (16, 24, 32)


class AeadError(Exception):
    """Raised when encryption limits are exceeded or authentication fails."""


def generate_key(size: int = 32) -> bytes:
    """Return a random AES key of the given size in bytes."""
    if size not in AES_KEY_SIZES:
        raise ValueError(f"AES key size must be one of {AES_KEY_SIZES}, got {size}")
    return secrets.token_bytes(size)


class AesGcm:
    """AES-GCM with a configurable nonce size (12 bytes recommended)."""

    def __init__(self, key: bytes, nonce_size: int = 12) -> None:
        key = bytes(key)
        if len(key) not in AES_KEY_SIZES:
            raise ValueError(f"AES key must be 16, 24 or 32 bytes, got {len(key)}")
        if nonce_size < 1:
            raise ValueError("nonce size must be positive")
        self.nonce_size = nonce_size
        self._cipher = Cipher(algorithms.AES(key), modes.ECB())
        self._ghash = GHash(self._encrypt_blocks(bytes(BLOCK_SIZE)))

    def _encrypt_blocks(self, data: bytes) -> bytes:
        encryptor = self._cipher.encryptor()
        return encryptor.update(data) + encryptor.finalize()

    def _check_nonce(self, nonce: bytes) -> bytes:
        nonce = bytes(nonce)
        if len(nonce) != self.nonce_size:
            raise ValueError(f"nonce must be {self.nonce_size} bytes, got {len(nonce)}")
        return nonce

    def _init_ctr(self, nonce: bytes) -> tuple[bytes, bytes]:
        """Derive the pre-counter block J0 and the tag mask E(K, J0)."""
        if len(nonce) == 12:
            j0 = nonce + b"\x00\x00\x00\x01"
        else:
            ghash = self._ghash.copy()
            ghash.update_padded(nonce)
            ghash.update_block(bytes(8) + (len(nonce) * 8).to_bytes(8, "big"))
            j0 = ghash.finalize()
        return j0, self._encrypt_blocks(j0)

    def _apply_keystream(self, j0: bytes, data: bytes) -> bytes:
        """XOR data with the CTR keystream starting at counter J0 + 1."""
        if not data:
            return b""
        prefix = j0[:12]
        counter = int.from_bytes(j0[12:], "big")
        count = -(-len(data) // BLOCK_SIZE)
        counters = b"".join(
            prefix + ((counter + i) & 0xFFFFFFFF).to_bytes(4, "big")
            for i in range(1, count + 1)
        )
        keystream = self._encrypt_blocks(counters)[: len(data)]
        mixed = int.from_bytes(data, "big") ^ int.from_bytes(keystream, "big")
        return mixed.to_bytes(len(data), "big")

    def _compute_tag(self, mask: bytes, associated_data: bytes, ciphertext: bytes) -> bytes:
        ghash = self._ghash.copy()
        ghash.update_padded(associated_data)
        ghash.update_padded(ciphertext)
        ghash.update_block(
            (len(associated_data) * 8).to_bytes(8, "big")
            + (len(ciphertext) * 8).to_bytes(8, "big")
        )
        digest = ghash.finalize()
        return bytes(a ^ b for a, b in zip(digest, mask))

    def encrypt_detached(
        self, nonce: bytes, plaintext: bytes, associated_data: bytes = b""
    ) -> tuple[bytes, bytes]:
        """Encrypt and return (ciphertext, tag)."""
        nonce = self._check_nonce(nonce)
        plaintext = bytes(plaintext)
        associated_data = bytes(associated_data)
        if len(plaintext) > P_MAX or len(associated_data) > A_MAX:
            raise AeadError("input exceeds AES-GCM length limits")
        j0, mask = self._init_ctr(nonce)
        ciphertext = self._apply_keystream(j0, plaintext)
        return ciphertext, self._compute_tag(mask, associated_data, ciphertext)

    def decrypt_detached(
        self, nonce: bytes, ciphertext: bytes, tag: bytes, associated_data: bytes = b""
    ) -> bytes:
        """Verify the tag and return the plaintext."""
        nonce = self._check_nonce(nonce)
        ciphertext = bytes(ciphertext)
        associated_data = bytes(associated_data)
        if len(ciphertext) > C_MAX or len(associated_data) > A_MAX:
            raise AeadError("input exceeds AES-GCM length limits")
        j0, mask = self._init_ctr(nonce)
        expected = self._compute_tag(mask, associated_data, ciphertext)
        if not hmac.compare_digest(expected, bytes(tag)):
            raise AeadError("authentication failed")
        return self._apply_keystream(j0, ciphertext)

    def encrypt(self, nonce: bytes, plaintext: bytes, associated_data: bytes = b"") -> bytes:
        """Encrypt and return the ciphertext with the tag appended."""
        ciphertext, tag = self.encrypt_detached(nonce, plaintext, associated_data)
        return ciphertext + tag

    def decrypt(self, nonce: bytes, ciphertext: bytes, associated_data: bytes = b"") -> bytes:
        """Decrypt a ciphertext that carries its tag at the end."""
        ciphertext = bytes(ciphertext)
        if len(ciphertext) < TAG_SIZE:
            raise AeadError("ciphertext shorter than the authentication tag")
        body, tag = ciphertext[:-TAG_SIZE], ciphertext[-TAG_SIZE:]
        return self.decrypt_detached(nonce, body, tag, associated_data)

    def generate_nonce(self) -> bytes:
        """Return a random nonce of this cipher's nonce size."""
        return secrets.token_bytes(self.nonce_size)


class Aes128Gcm(AesGcm):
    """AES-GCM with a 128-bit key and 96-bit nonce."""

    KEY_SIZE = 16

    def __init__(self, key: bytes) -> None:
        if len(key) != self.KEY_SIZE:
            raise ValueError(f"key must be {self.KEY_SIZE} bytes, got {len(key)}")
        super().__init__(key, 12)


class Aes256Gcm(AesGcm):
    """AES-GCM with a 256-bit key and 96-bit nonce."""

    KEY_SIZE = 32

    def __init__(self, key: bytes) -> None:
        if len(key) != self.KEY_SIZE:
            raise ValueError(f"key must be {self.KEY_SIZE} bytes, got {len(key)}")
        super().__init__(key, 12)