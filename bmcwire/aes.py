"""AES-128-CBC confidentiality for IPMI v2.0 payloads (section 13.29)."""

from __future__ import annotations

import os

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import DecodeError

BLOCK_SIZE = 16


class AES128CBC:
    """Encrypts and decrypts IPMI messages with AES-128-CBC.

    The key is the first 128 bits of K2. Encrypted payloads consist of a
    16-byte IV followed by the ciphertext of the message and its
    confidentiality trailer (pad bytes 0x01, 0x02, ... and a pad length).
    """

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        if len(key) != BLOCK_SIZE:
            raise ValueError(f"AES-128 key must be {BLOCK_SIZE} bytes, got {len(key)}")
        self._algorithm = algorithms.AES(key)

    def decode(self, data: bytes) -> bytes:
        """Decrypt a payload, returning the message without its trailer.

        Care should be taken when displaying the error, as distinguishing
        decryption failures from padding failures enables a padding oracle.
        """
        data = bytes(data)
        if len(data) < BLOCK_SIZE + 1 or len(data) % BLOCK_SIZE != 0:
            raise DecodeError(
                f"AES payload must be at least {BLOCK_SIZE + 1} bytes and have an "
                f"overall length divisible by {BLOCK_SIZE}, got length of {len(data)}"
            )

        iv, ciphertext = data[:BLOCK_SIZE], data[BLOCK_SIZE:]
        decryptor = Cipher(self._algorithm, modes.CBC(iv)).decryptor()
        plaintext = decryptor.update(ciphertext) + decryptor.finalize()

        pad_bytes = plaintext[-1]
        if pad_bytes > BLOCK_SIZE - 1:
            raise DecodeError(f"invalid number of pad bytes: {pad_bytes}")
        pad_start = len(plaintext) - pad_bytes - 1
        pad = plaintext[pad_start : pad_start + pad_bytes]
        for expected, actual in enumerate(pad, start=1):
            if actual != expected:
                raise DecodeError(
                    f"invalid pad byte: offset {expected - 1} "
                    f"({BLOCK_SIZE + pad_start + expected - 1} within payload) should "
                    f"have value {expected}, but has value {actual}"
                )
        return plaintext[:pad_start]

    def encode(self, message: bytes) -> bytes:
        """Encrypt a message under a fresh random IV, returning IV + ciphertext."""
        message = bytes(message)
        pad_length = (BLOCK_SIZE - 1) - (len(message) % BLOCK_SIZE)
        trailer = bytes(range(1, pad_length + 1)) + bytes([pad_length])
        iv = os.urandom(BLOCK_SIZE)
        encryptor = Cipher(self._algorithm, modes.CBC(iv)).encryptor()
        return iv + encryptor.update(message + trailer) + encryptor.finalize()