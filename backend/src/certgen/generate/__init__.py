"""Self-signed certificate generation.

This module provides:
- RSA key pair + self-signed certificate generation for a domain
- A default certificate for a random placeholder domain
- PEM encoding of EC/RSA private keys, signing requests and DER certificates
"""

from datetime import datetime

from cryptography.hazmat.primitives.asymmetric import rsa

from certgen.generate.certificate_generator import CertificateGenerator
from certgen.generate.default import (
    TLSCertificate,
    default_certificate,
    random_domain,
    x509_key_pair,
)
from certgen.generate.errors import (
    CertGenerateError,
    CertificateBuildError,
    CertificateParseError,
    KeyGenerationError,
    RandomSourceError,
    UnsupportedInputKindError,
)
from certgen.generate.pem import pem_encode


def key_pair(domain: str, expiration: datetime | None = None) -> tuple[bytes, bytes]:
    """Generate (certificate_pem, private_key_pem) for domain."""
    return CertificateGenerator().key_pair(domain, expiration)


def pem_cert(
    private_key: rsa.RSAPrivateKey, domain: str, expiration: datetime | None = None
) -> bytes:
    """Self-sign a PEM certificate for domain with an existing RSA key."""
    return CertificateGenerator().pem_cert(private_key, domain, expiration)


__all__ = [
    "CertGenerateError",
    "CertificateBuildError",
    "CertificateGenerator",
    "CertificateParseError",
    "KeyGenerationError",
    "RandomSourceError",
    "TLSCertificate",
    "UnsupportedInputKindError",
    "default_certificate",
    "key_pair",
    "pem_cert",
    "pem_encode",
    "random_domain",
    "x509_key_pair",
]
