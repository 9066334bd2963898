"""RSA encryption with keys read from PEM files, including chunked decryption."""

from __future__ import annotations

import enum
import os
from typing import Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding as asym_padding
from cryptography.hazmat.primitives.asymmetric import rsa

DECRYPT_MAX_SIZE = 1024


class RSAErrorCode(enum.IntEnum):
    """Failure kinds reported by ``RSAError``."""

    SET_PUBLIC_KEY_ERROR = -201
    SET_PRIVATE_KEY_ERROR = -202
    CHECK_FILE_EXIST_ERROR = -203
    READ_PUBLIC_KEY_ERROR = -204
    READ_PRIVATE_KEY_ERROR = -205
    ENCRYPT_ERROR = -206
    DECRYPT_ERROR = -207
    INVALID_ARGS = -208
    ENCRYPT_DATA_TO_LARGE = -209
    TRANSFORM_ARGS_ERROR = -210
    TRANSFORM_CERT_ERROR = -211
    TRANSFORM_OPEN_ERROR = -212


class Padding(enum.IntEnum):
    """RSA padding schemes; ``0`` passed as padding means ``NONE``."""

    PKCS1 = 1
    NONE = 3
    OAEP = 4


class RSAError(Exception):
    """Raised when an RSA operation fails; ``code`` tells which step."""

    def __init__(self, code: RSAErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code


def _to_bytes(content: Union[bytes, bytearray, str]) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8")
    return bytes(content)


def _padding_mode(padding: int) -> Padding:
    if padding == 0:
        return Padding.NONE
    try:
        return Padding(padding)
    except ValueError:
        raise RSAError(RSAErrorCode.INVALID_ARGS, f"unsupported padding {padding}") from None


def _key_bytes(key: Union[rsa.RSAPublicKey, rsa.RSAPrivateKey]) -> int:
    return (key.key_size + 7) // 8


def _until_nul(data: bytes) -> bytes:
    return data.split(b"\0", 1)[0]


def _oaep() -> asym_padding.OAEP:
    return asym_padding.OAEP(
        mgf=asym_padding.MGF1(algorithm=hashes.SHA1()),
        algorithm=hashes.SHA1(),
        label=None,
    )


def _file_exists(path: str) -> bool:
    try:
        with open(path, "rb"):
            return True
    except OSError:
        return False


class RSACrypto:
    """Encrypts with a PEM public key and decrypts with a PEM private key.

    A key of k bytes encrypts at most k bytes in one go (k - 11 with PKCS#1
    v1.5 padding). Results are returned and also kept in ``encrypt_result``
    and ``decrypt_result``.
    """

    def __init__(self, public_key: str = "", private_key: str = "") -> None:
        self.public_key_path = public_key
        self.private_key_path = private_key
        self.encrypt_result = b""
        self.decrypt_result = b""

    def set_public_key_path(self, public_key: str) -> None:
        """Use the public key at ``public_key``; the file must exist."""
        if not _file_exists(public_key):
            raise RSAError(RSAErrorCode.SET_PUBLIC_KEY_ERROR, f"cannot open {public_key!r}")
        self.public_key_path = public_key

    def set_private_key_path(self, private_key: str) -> None:
        """Use the private key at ``private_key``; the file must exist."""
        if not _file_exists(private_key):
            raise RSAError(RSAErrorCode.SET_PRIVATE_KEY_ERROR, f"cannot open {private_key!r}")
        self.private_key_path = private_key

    def _load_public_key(self) -> rsa.RSAPublicKey:
        try:
            with open(self.public_key_path, "rb") as handle:
                key = serialization.load_pem_public_key(handle.read())
        except (OSError, ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise RSAError(RSAErrorCode.READ_PUBLIC_KEY_ERROR,
                           f"cannot read RSA public key: {exc}") from exc
        if not isinstance(key, rsa.RSAPublicKey):
            raise RSAError(RSAErrorCode.READ_PUBLIC_KEY_ERROR, "public key is not an RSA key")
        return key

    def _load_private_key(self) -> rsa.RSAPrivateKey:
        try:
            with open(self.private_key_path, "rb") as handle:
                key = serialization.load_pem_private_key(handle.read(), password=None)
        except (OSError, ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise RSAError(RSAErrorCode.READ_PRIVATE_KEY_ERROR,
                           f"cannot read RSA private key: {exc}") from exc
        if not isinstance(key, rsa.RSAPrivateKey):
            raise RSAError(RSAErrorCode.READ_PRIVATE_KEY_ERROR, "private key is not an RSA key")
        return key

    def encrypt_content(self, content: Union[bytes, bytearray, str],
                        padding: int = Padding.PKCS1) -> bytes:
        """Encrypt ``content`` (up to its first NUL byte) with the public key."""
        mode = _padding_mode(padding)
        key = self._load_public_key()
        data = _to_bytes(content)
        size = _key_bytes(key)
        if size < len(data):
            raise RSAError(RSAErrorCode.ENCRYPT_DATA_TO_LARGE,
                           f"{len(data)} bytes do not fit a {size} byte key")
        plain = _until_nul(data)
        try:
            if mode is Padding.NONE:
                result = self._raw_encrypt(key, plain, size)
            elif mode is Padding.OAEP:
                result = key.encrypt(plain, _oaep())
            else:
                result = key.encrypt(plain, asym_padding.PKCS1v15())
        except ValueError as exc:
            raise RSAError(RSAErrorCode.ENCRYPT_ERROR, f"RSA encrypt failed: {exc}") from exc
        self.encrypt_result = result
        return result

    @staticmethod
    def _raw_encrypt(key: rsa.RSAPublicKey, plain: bytes, size: int) -> bytes:
        if len(plain) != size:
            raise ValueError(f"unpadded data must be exactly {size} bytes")
        numbers = key.public_numbers()
        value = int.from_bytes(plain, "big")
        if value >= numbers.n:
            raise ValueError("data is too large for the modulus")
        return pow(value, numbers.e, numbers.n).to_bytes(size, "big")

    @staticmethod
    def _decrypt_block(key: rsa.RSAPrivateKey, block: bytes, mode: Padding,
                       size: int) -> bytes:
        if len(block) != size:
            raise ValueError(f"cipher block must be {size} bytes, got {len(block)}")
        if mode is Padding.NONE:
            numbers = key.private_numbers()
            modulus = numbers.public_numbers.n
            value = int.from_bytes(block, "big")
            if value >= modulus:
                raise ValueError("cipher block is too large for the modulus")
            return pow(value, numbers.d, modulus).to_bytes(size, "big")
        if mode is Padding.OAEP:
            return key.decrypt(block, _oaep())
        return key.decrypt(block, asym_padding.PKCS1v15())

    def decrypt_content(self, content: Union[bytes, bytearray], origlen: int,
                        padding: int = Padding.PKCS1) -> bytes:
        """Decrypt ``content`` with the private key.

        ``origlen`` is the length of the base64 text the cipher data came
        from. When the data it implies exceeds one key block, the content is
        decrypted block by block. Each decrypted block is kept up to its
        first NUL byte.
        """
        mode = _padding_mode(padding)
        key = self._load_private_key()
        data = bytes(content)
        size = _key_bytes(key)
        total = origlen // 4 * 3 + 2

        try:
            if total > size:
                chunks = -(-total // size)
                pieces = [
                    _until_nul(self._decrypt_block(
                        key, data[index * size:(index + 1) * size], mode, size))
                    for index in range(chunks - 1)
                ]
                result = b"".join(pieces)
            else:
                block = self._decrypt_block(key, data[:size], mode, size)
                result = _until_nul(block[:DECRYPT_MAX_SIZE])
        except ValueError as exc:
            raise RSAError(RSAErrorCode.DECRYPT_ERROR, f"RSA decrypt failed: {exc}") from exc

        self.decrypt_result = result
        return result

    def public_key_from_certificate(self, cert_path: str, public_key_path: str) -> None:
        """Write the RSA public key of the PEM certificate at ``cert_path`` to a PEM file."""
        if not cert_path or not public_key_path:
            raise RSAError(RSAErrorCode.TRANSFORM_ARGS_ERROR, "both paths are required")
        try:
            with open(cert_path, "rb") as handle:
                cert_data = handle.read()
        except OSError as exc:
            raise RSAError(RSAErrorCode.TRANSFORM_OPEN_ERROR,
                           f"cannot open {cert_path!r}: {exc}") from exc
        try:
            cert = x509.load_pem_x509_certificate(cert_data)
            key = cert.public_key()
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise RSAError(RSAErrorCode.TRANSFORM_CERT_ERROR,
                           f"cannot read certificate: {exc}") from exc
        if not isinstance(key, rsa.RSAPublicKey):
            raise RSAError(RSAErrorCode.TRANSFORM_CERT_ERROR, "certificate key is not RSA")
        pem = key.public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        try:
            with open(os.fspath(public_key_path), "wb") as handle:
                handle.write(pem)
        except OSError as exc:
            raise RSAError(RSAErrorCode.TRANSFORM_OPEN_ERROR,
                           f"cannot write {public_key_path!r}: {exc}") from exc