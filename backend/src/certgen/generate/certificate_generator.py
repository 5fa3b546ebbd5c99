"""Self-signed X.509 certificate generation.

Generates an RSA key and a certificate signed by that same key, bound to a
single DNS name.
"""

import logging
import secrets
import time
from datetime import datetime, timedelta, timezone

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID
from opentelemetry import trace

from certgen.generate.errors import (
    CertificateBuildError,
    KeyGenerationError,
    RandomSourceError,
)
from certgen.metrics import generator_metrics
from shared.config import settings

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


def _naive_utc(value: datetime) -> datetime:
    """Normalize a datetime to naive UTC. Naive input is taken as UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class CertificateGenerator:
    """Generates self-signed X.509 certificates.

    Certificate attributes:
    - Subject / Issuer: CN=<common name>
    - Validity: now() to expiration (default now() + 365 days)
    - Key Usage: Key Encipherment
    - Basic Constraints: CA=False
    - Subject Alternative Name: DNS:<domain>
    - Key: RSA 2048
    """

    # Configuration
    DEFAULT_VALIDITY_DAYS = 365
    KEY_SIZE = 2048
    PUBLIC_EXPONENT = 65537
    SERIAL_NUMBER_BITS = 128
    # Earliest date the X.509 encoder can represent
    EARLIEST_VALIDITY = datetime(1950, 1, 1)

    def __init__(self, common_name: str | None = None) -> None:
        """Initialize generator.

        Args:
            common_name: Subject CN. Defaults to settings.DEFAULT_CERT_COMMON_NAME.
        """
        self._common_name = common_name or settings.DEFAULT_CERT_COMMON_NAME

    @property
    def common_name(self) -> str:
        return self._common_name

    def key_pair(
        self,
        domain: str,
        expiration: datetime | None = None,
    ) -> tuple[bytes, bytes]:
        """Generate a fresh RSA key and a self-signed certificate for domain.

        Args:
            domain: DNS name placed in the certificate. Not validated.
            expiration: NotAfter of the certificate. None means now + 365 days.

        Returns:
            Tuple of (certificate_pem, private_key_pem).

        Raises:
            KeyGenerationError: If the RSA key cannot be generated.
            RandomSourceError: If the serial number cannot be drawn.
            CertificateBuildError: If the certificate cannot be built or signed.
        """
        with tracer.start_as_current_span("CertificateGenerator.key_pair") as span:
            span.set_attribute("domain", domain)

            private_key = self._generate_key()
            key_pem = private_key.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.TraditionalOpenSSL,
                encryption_algorithm=serialization.NoEncryption(),
            )

            cert_pem = self.pem_cert(private_key, domain, expiration)
            return cert_pem, key_pem

    def pem_cert(
        self,
        private_key: rsa.RSAPrivateKey,
        domain: str,
        expiration: datetime | None = None,
    ) -> bytes:
        """Build and self-sign a certificate, returned as a PEM CERTIFICATE block.

        An expiration in the past is kept as given and yields an already
        expired certificate.

        Raises:
            RandomSourceError: If the serial number cannot be drawn.
            CertificateBuildError: If the certificate cannot be built or signed.
        """
        certificate = self._build_certificate(private_key, domain, expiration)
        return certificate.public_bytes(serialization.Encoding.PEM)

    def _generate_key(self) -> rsa.RSAPrivateKey:
        try:
            private_key = rsa.generate_private_key(
                public_exponent=self.PUBLIC_EXPONENT,
                key_size=self.KEY_SIZE,
            )
        except Exception as e:
            generator_metrics.record_failure("key")
            logger.error(
                "key_generation_failed",
                extra={"key_size": self.KEY_SIZE, "error": str(e)},
            )
            raise KeyGenerationError(f"Failed to generate RSA key: {e}") from e

        generator_metrics.record_key_generated()
        return private_key

    def _serial_number(self) -> int:
        """Draw a serial from [1, 2**128). X.509 serials must be positive."""
        try:
            return secrets.randbelow((1 << self.SERIAL_NUMBER_BITS) - 1) + 1
        except OSError as e:
            generator_metrics.record_failure("random")
            logger.error("serial_number_failed", extra={"error": str(e)})
            raise RandomSourceError(f"Failed to draw serial number: {e}") from e

    def _build_certificate(
        self,
        private_key: rsa.RSAPrivateKey,
        domain: str,
        expiration: datetime | None,
    ) -> x509.Certificate:
        with tracer.start_as_current_span("CertificateGenerator.build_certificate") as span:
            span.set_attribute("domain", domain)

            start_time = time.time()
            serial_number = self._serial_number()
            span.set_attribute("serial", format(serial_number, "032x"))

            try:
                now = datetime.now(timezone.utc)
                not_before = _naive_utc(now)
                if expiration is None:
                    not_after = not_before + timedelta(days=self.DEFAULT_VALIDITY_DAYS)
                else:
                    not_after = _naive_utc(expiration)
                if not_after < self.EARLIEST_VALIDITY:
                    raise ValueError(
                        f"expiration {not_after.isoformat()} is before "
                        f"{self.EARLIEST_VALIDITY.date().isoformat()}"
                    )

                name = x509.Name(
                    [
                        x509.NameAttribute(NameOID.COMMON_NAME, self._common_name),
                    ]
                )

                # Validity goes through the constructor: the setter methods
                # refuse a NotAfter earlier than NotBefore.
                cert_builder = (
                    x509.CertificateBuilder(
                        not_valid_before=not_before,
                        not_valid_after=not_after,
                    )
                    .subject_name(name)
                    .issuer_name(name)
                    .public_key(private_key.public_key())
                    .serial_number(serial_number)
                    .add_extension(
                        x509.KeyUsage(
                            digital_signature=False,
                            key_encipherment=True,
                            key_cert_sign=False,
                            crl_sign=False,
                            content_commitment=False,
                            data_encipherment=False,
                            key_agreement=False,
                            encipher_only=False,
                            decipher_only=False,
                        ),
                        critical=True,
                    )
                    .add_extension(
                        x509.BasicConstraints(ca=False, path_length=None),
                        critical=True,
                    )
                    .add_extension(
                        x509.SubjectAlternativeName([x509.DNSName(domain)]),
                        critical=False,
                    )
                )

                certificate = cert_builder.sign(private_key, hashes.SHA256())

            except Exception as e:
                generator_metrics.record_failure("build")
                logger.error(
                    "certificate_build_failed",
                    extra={"domain": domain, "error": str(e)},
                )
                raise CertificateBuildError(f"Failed to build certificate: {e}") from e

            generation_time = time.time() - start_time
            generator_metrics.record_certificate_generated(generation_time)

            logger.info(
                "certificate_generated",
                extra={
                    "domain": domain,
                    "serial": format(serial_number, "032x"),
                    "not_after": not_after.isoformat(),
                    "duration_seconds": generation_time,
                },
            )

            return certificate
