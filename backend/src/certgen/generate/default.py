"""Default (fallback) TLS certificate with a random placeholder domain."""

import hashlib
import logging
import secrets
import ssl
import tempfile
from dataclasses import dataclass
from pathlib import Path

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes
from opentelemetry import trace

from certgen.generate.certificate_generator import CertificateGenerator
from certgen.generate.errors import CertificateParseError, RandomSourceError
from certgen.metrics import generator_metrics
from shared.config import settings

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

RANDOM_BYTES = 100


@dataclass(frozen=True)
class TLSCertificate:
    """A certificate bound to its private key, usable as a TLS server identity."""

    certificate: x509.Certificate
    private_key: PrivateKeyTypes
    certificate_pem: bytes
    private_key_pem: bytes

    @property
    def domain(self) -> str:
        """First DNS name of the certificate."""
        san = self.certificate.extensions.get_extension_for_class(x509.SubjectAlternativeName)
        return san.value.get_values_for_type(x509.DNSName)[0]

    def server_context(self) -> ssl.SSLContext:
        """Build a server-side SSLContext loaded with this certificate and key.

        The stdlib only loads key material from files, so the pair is written
        to a private temporary directory that is removed before returning.
        """
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
        with tempfile.TemporaryDirectory() as tmp:
            cert_file = Path(tmp) / "cert.pem"
            key_file = Path(tmp) / "key.pem"
            cert_file.write_bytes(self.certificate_pem)
            key_file.touch(mode=0o600)
            key_file.write_bytes(self.private_key_pem)
            context.load_cert_chain(certfile=str(cert_file), keyfile=str(key_file))
        return context


def x509_key_pair(cert_pem: bytes, key_pem: bytes) -> TLSCertificate:
    """Parse a PEM certificate and PEM private key into a TLSCertificate.

    Raises:
        CertificateParseError: If either side does not parse or the private
            key does not match the certificate's public key.
    """
    try:
        certificate = x509.load_pem_x509_certificate(cert_pem)
        private_key = serialization.load_pem_private_key(key_pem, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        generator_metrics.record_failure("parse")
        logger.error("certificate_parse_failed", extra={"error": str(e)})
        raise CertificateParseError(f"Failed to parse certificate/key pair: {e}") from e

    spki = serialization.PublicFormat.SubjectPublicKeyInfo
    if certificate.public_key().public_bytes(
        serialization.Encoding.DER, spki
    ) != private_key.public_key().public_bytes(serialization.Encoding.DER, spki):
        generator_metrics.record_failure("parse")
        logger.error("certificate_key_mismatch")
        raise CertificateParseError("Private key does not match certificate public key")

    return TLSCertificate(
        certificate=certificate,
        private_key=private_key,
        certificate_pem=cert_pem,
        private_key_pem=key_pem,
    )


def random_domain(suffix: str | None = None) -> str:
    """Build a placeholder domain "<hex32>.<hex32>.<suffix>" from fresh randomness."""
    suffix = suffix or settings.DEFAULT_CERT_DOMAIN_SUFFIX
    try:
        random_bytes = secrets.token_bytes(RANDOM_BYTES)
    except OSError as e:
        generator_metrics.record_failure("random")
        logger.error("random_source_failed", extra={"error": str(e)})
        raise RandomSourceError(f"Failed to read random bytes: {e}") from e

    z = hashlib.sha256(random_bytes).hexdigest()
    return f"{z[:32]}.{z[32:]}.{suffix}"


def default_certificate(generator: CertificateGenerator | None = None) -> TLSCertificate:
    """Generate a self-signed certificate for a random placeholder domain.

    Raises:
        RandomSourceError: If the random source cannot be read.
        KeyGenerationError: If RSA key generation fails.
        CertificateBuildError: If the certificate cannot be built.
        CertificateParseError: If the generated pair cannot be reassembled.
    """
    with tracer.start_as_current_span("default_certificate") as span:
        domain = random_domain()
        span.set_attribute("domain", domain)

        generator = generator or CertificateGenerator()
        cert_pem, key_pem = generator.key_pair(domain, None)
        tls_certificate = x509_key_pair(cert_pem, key_pem)

        logger.info("default_certificate_generated", extra={"domain": domain})
        return tls_certificate
