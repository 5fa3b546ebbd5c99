"""certgen CLI - generate self-signed certificate/key pairs."""

import sys
from datetime import datetime
from pathlib import Path

import click

from . import __version__
from .generate import CertGenerateError, default_certificate, key_pair
from shared.config import settings
from shared.logging import setup_logging
from shared.metrics import setup_metrics
from shared.tracing import setup_tracing

EXPIRES_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S%z",
]


def write_pair(cert_pem: bytes, key_pem: bytes, cert_out: Path | None, key_out: Path | None):
    """Write PEM blocks to files, or to stdout when no path is given."""
    if cert_out is None:
        click.echo(cert_pem.decode("ascii"), nl=False)
    else:
        cert_out.parent.mkdir(parents=True, exist_ok=True)
        cert_out.write_bytes(cert_pem)
        cert_out.chmod(0o644)

    if key_out is None:
        click.echo(key_pem.decode("ascii"), nl=False)
    else:
        key_out.parent.mkdir(parents=True, exist_ok=True)
        key_out.touch(mode=0o600)
        # touch keeps the mode of an existing file
        key_out.chmod(0o600)
        key_out.write_bytes(key_pem)


@click.group()
@click.version_option(version=__version__, prog_name="certgen")
def main():
    """certgen - self-signed certificates for default TLS termination."""
    setup_logging()
    setup_tracing(settings.APP_NAME)
    setup_metrics(settings.APP_NAME)


@main.command()
@click.argument("domain")
@click.option("--expires", type=click.DateTime(formats=EXPIRES_FORMATS), default=None,
              help="NotAfter, ISO8601; UTC when no offset is given (default: one year from now)")
@click.option("--cert-out", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("--key-out", type=click.Path(dir_okay=False, path_type=Path), default=None)
def keypair(domain: str, expires: datetime | None, cert_out: Path | None, key_out: Path | None):
    """Generate a certificate and RSA key for DOMAIN."""
    try:
        cert_pem, key_pem = key_pair(domain, expires)
    except CertGenerateError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    write_pair(cert_pem, key_pem, cert_out, key_out)


@main.command()
@click.option("--cert-out", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("--key-out", type=click.Path(dir_okay=False, path_type=Path), default=None)
def default(cert_out: Path | None, key_out: Path | None):
    """Generate a default certificate for a random placeholder domain."""
    try:
        tls_certificate = default_certificate()
    except CertGenerateError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    write_pair(tls_certificate.certificate_pem, tls_certificate.private_key_pem, cert_out, key_out)
    click.echo(tls_certificate.domain, err=True)


if __name__ == "__main__":
    main()
