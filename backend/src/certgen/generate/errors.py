"""Errors raised while generating and encoding certificates."""


class CertGenerateError(Exception):
    """Base class for certificate generation failures."""

    pass


class RandomSourceError(CertGenerateError):
    """Raised when the secure random source cannot be read."""

    pass


class KeyGenerationError(CertGenerateError):
    """Raised when RSA key generation fails."""

    pass


class CertificateBuildError(CertGenerateError):
    """Raised when building or signing the certificate template fails."""

    pass


class CertificateParseError(CertGenerateError):
    """Raised when PEM or DER material cannot be turned back into a certificate."""

    pass


class UnsupportedInputKindError(CertGenerateError, TypeError):
    """Raised when the PEM encoder receives a value it has no block type for."""

    pass
