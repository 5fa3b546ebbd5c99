"""PEM encoding for the key, request and certificate kinds the generator deals with."""

import logging
import ssl

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from certgen.generate.errors import UnsupportedInputKindError
from certgen.metrics import generator_metrics

logger = logging.getLogger(__name__)

EC_PRIVATE_KEY = "EC PRIVATE KEY"
RSA_PRIVATE_KEY = "RSA PRIVATE KEY"
CERTIFICATE_REQUEST = "CERTIFICATE REQUEST"
CERTIFICATE = "CERTIFICATE"

PemEncodable = (
    ec.EllipticCurvePrivateKey
    | rsa.RSAPrivateKey
    | x509.CertificateSigningRequest
    | bytes
    | bytearray
)


def pem_encode(data: PemEncodable) -> bytes:
    """Encode data as a PEM block whose type depends on the kind of data.

    - EC private key: "EC PRIVATE KEY" (SEC1)
    - RSA private key: "RSA PRIVATE KEY" (PKCS#1)
    - Certificate signing request: "CERTIFICATE REQUEST"
    - bytes: "CERTIFICATE", the bytes wrapped as given (DER certificate)

    Raises:
        UnsupportedInputKindError: If data is none of the kinds above.
    """
    if isinstance(data, (ec.EllipticCurvePrivateKey, rsa.RSAPrivateKey)):
        # TraditionalOpenSSL is SEC1 for EC keys and PKCS#1 for RSA keys
        kind = EC_PRIVATE_KEY if isinstance(data, ec.EllipticCurvePrivateKey) else RSA_PRIVATE_KEY
        encoded = data.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
    elif isinstance(data, x509.CertificateSigningRequest):
        kind = CERTIFICATE_REQUEST
        encoded = data.public_bytes(serialization.Encoding.PEM)
    elif isinstance(data, (bytes, bytearray)):
        kind = CERTIFICATE
        encoded = ssl.DER_cert_to_PEM_cert(bytes(data)).encode("ascii")
    else:
        generator_metrics.record_failure("encode")
        logger.error("pem_encode_unsupported", extra={"kind": type(data).__name__})
        raise UnsupportedInputKindError(
            f"Cannot PEM-encode value of type {type(data).__name__}"
        )

    generator_metrics.record_pem_encoded(kind)
    return encoded

