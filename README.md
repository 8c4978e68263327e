# gcmcipher

AES-GCM authenticated encryption, as specified in NIST SP 800-38D.

The AES block cipher comes from `cryptography`. Counter mode, GHASH and tag
handling are implemented in this package. Because of that, `AesGcm` accepts
nonces of any length. A 12-byte nonce is used directly. A nonce of any other
length is first compressed with GHASH, as the standard describes.

## Ciphers

The ciphers live in `gcmcipher.gcm`:

- `Aes128Gcm(key)` takes a 16-byte key and uses 12-byte nonces.
- `Aes256Gcm(key)` takes a 32-byte key and uses 12-byte nonces.
- `AesGcm(key, nonce_size=12)` takes a 16-, 24- or 32-byte key and a nonce length of your choosing.

Every cipher has these methods:

- `encrypt(nonce, plaintext, associated_data=b"")` returns the ciphertext with the 16-byte tag appended.
- `decrypt(nonce, ciphertext, associated_data=b"")` checks the trailing tag and returns the plaintext.
- `encrypt_detached(nonce, plaintext, associated_data=b"")` returns `(ciphertext, tag)`.
- `decrypt_detached(nonce, ciphertext, tag, associated_data=b"")` checks `tag` and returns the plaintext.
- `generate_nonce()` returns a random nonce of the cipher's nonce size.

`generate_key(size=32)` returns a random AES key. The size must be 16, 24 or 32.

### Errors

`AeadError` is raised in these cases:

- the tag does not match;
- the ciphertext passed to `decrypt` is shorter than the tag;
- the associated data is longer than 2^36 bytes;
- the plaintext is longer than 2^36 bytes;
- a ciphertext is longer than 2^36 + 16 bytes.

`ValueError` is raised for a key of the wrong size and for a nonce that does
not match the cipher's nonce size.

Use each nonce only once with a given key.

## Usage

```python
from gcmcipher.gcm import AeadError, Aes256Gcm, generate_key

cipher = Aes256Gcm(generate_key(32))

nonce = cipher.generate_nonce()
sealed = cipher.encrypt(nonce, b"plaintext message", b"header")

assert cipher.decrypt(nonce, sealed, b"header") == b"plaintext message"

try:
    cipher.decrypt(nonce, sealed, b"other header")
except AeadError:
    print("authentication failed")
```

With a detached tag:

```python
ciphertext, tag = cipher.encrypt_detached(nonce, b"data")
plaintext = cipher.decrypt_detached(nonce, ciphertext, tag)
```

With a nonce that is not 12 bytes:

```python
from gcmcipher.gcm import AesGcm, generate_key

cipher = AesGcm(generate_key(16), nonce_size=8)
nonce = cipher.generate_nonce()
sealed = cipher.encrypt(nonce, b"data")
```

## GHASH

You can use `gcmcipher.ghash.GHash(key)` on its own. The key is a 16-byte hash subkey.

- `update_block(block)` absorbs exactly one 16-byte block.
- `update_padded(data)` absorbs data of any length. It pads the last partial block with zeros.
- `finalize()` returns the 16-byte digest and leaves the state unchanged.
- `copy()` returns an independent copy of the running state.

## Limitations

- The library works on whole byte strings. It has no in-place or streaming encryption.
- There is no command-line tool.
- GHASH is written in pure Python. It is not constant-time, and it is slow on large inputs.