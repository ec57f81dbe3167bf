"""
RSA decryption of the encrypted account credentials file.

The credentials file holds base64 text of an RSA-OAEP ciphertext. Both the
OAEP digest and the MGF1 digest are SHA-256, so the file must be produced
with exactly that padding (see encrypt()).
"""

import base64
import binascii
import logging
from pathlib import Path
from typing import Optional

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..models.exceptions import DecryptionError


logger = logging.getLogger(__name__)


def _oaep_padding() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None
    )


def load_private_key(private_key_pem: str, passphrase: Optional[str] = None) -> rsa.RSAPrivateKey:
    """
    Load an RSA private key from PEM text.
    
    Raises:
        DecryptionError: If the key material is malformed or not RSA
    """
    try:
        key = serialization.load_pem_private_key(
            private_key_pem.encode('utf-8'),
            password=passphrase.encode('utf-8') if passphrase else None
        )
    except (ValueError, TypeError) as e:
        raise DecryptionError(f"Invalid private key: {str(e)}", error_code='InvalidKey')
    
    if not isinstance(key, rsa.RSAPrivateKey):
        raise DecryptionError("Private key is not an RSA key", error_code='InvalidKey')
    return key


def decode(ciphertext_b64: str, private_key_pem: str, passphrase: Optional[str] = None) -> str:
    """
    Decrypt base64 ciphertext with an RSA private key.
    
    Args:
        ciphertext_b64: Base64 text of the OAEP/SHA-256 ciphertext
        private_key_pem: PEM encoded RSA private key
        passphrase: Optional passphrase of an encrypted PEM
        
    Returns:
        str: UTF-8 plaintext
        
    Raises:
        DecryptionError: If the ciphertext or key is malformed, or the key
            does not match the public key used for encryption
    """
    try:
        ciphertext = base64.b64decode("".join(ciphertext_b64.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecryptionError(f"Credentials file is not valid base64: {str(e)}", error_code='InvalidCiphertext')
    
    key = load_private_key(private_key_pem, passphrase)
    
    try:
        plaintext = key.decrypt(ciphertext, _oaep_padding())
    except ValueError as e:
        raise DecryptionError(
            "Decryption failed. Ensure the credentials file was encrypted with "
            f"the public key matching this private key. {str(e)}",
            error_code='DecryptionFailed'
        )
    
    try:
        return plaintext.decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise DecryptionError(f"Decrypted credentials are not UTF-8 text: {str(e)}", error_code='InvalidPlaintext')


def decrypt_credentials_file(credentials_path: str, private_key_path: str,
                             passphrase: Optional[str] = None) -> str:
    """
    Read and decrypt the credentials file.
    
    Args:
        credentials_path: Path to the base64 encrypted credentials file
        private_key_path: Path to the PEM private key
        passphrase: Optional passphrase of an encrypted PEM
        
    Returns:
        str: Decrypted credentials table
    """
    logger.info(f"Decrypting {credentials_path}...")
    
    try:
        ciphertext_b64 = Path(credentials_path).read_text(encoding='utf-8')
    except OSError as e:
        raise DecryptionError(f"Cannot read credentials file {credentials_path}: {str(e)}",
                              context={'path': credentials_path})
    
    try:
        private_key_pem = Path(private_key_path).read_text(encoding='utf-8')
    except OSError as e:
        raise DecryptionError(f"Cannot read private key file {private_key_path}: {str(e)}",
                              context={'path': private_key_path})
    
    return decode(ciphertext_b64, private_key_pem, passphrase)


def encrypt(plaintext: str, public_key_pem: str) -> str:
    """
    Encrypt plaintext for a credentials file with an RSA public key.
    
    RSA-OAEP can only encrypt a single block, so the table must be smaller
    than the key size minus 66 bytes (190 bytes for a 2048-bit key).
    
    Returns:
        str: Base64 ciphertext
    """
    try:
        key = serialization.load_pem_public_key(public_key_pem.encode('utf-8'))
    except (ValueError, TypeError) as e:
        raise DecryptionError(f"Invalid public key: {str(e)}", error_code='InvalidKey')
    
    if not isinstance(key, rsa.RSAPublicKey):
        raise DecryptionError("Public key is not an RSA key", error_code='InvalidKey')
    
    try:
        ciphertext = key.encrypt(plaintext.encode('utf-8'), _oaep_padding())
    except ValueError as e:
        raise DecryptionError(f"Encryption failed: {str(e)}", error_code='EncryptionFailed')
    
    return base64.b64encode(ciphertext).decode('ascii')
