"""OpenTelemetry metrics for certificate generation."""

from opentelemetry import metrics

# Get meter for certgen module
meter = metrics.get_meter("certgen")

# Generation counters
keys_generated_total = meter.create_counter(
    name="certgen_keys_generated_total",
    description="Total RSA private keys generated",
    unit="1",
)

certificates_generated_total = meter.create_counter(
    name="certgen_certificates_generated_total",
    description="Total self-signed certificates generated",
    unit="1",
)

generation_failures_total = meter.create_counter(
    name="certgen_generation_failures_total",
    description="Total generation failures by stage",
    unit="1",
)

# Generation histogram
certificate_generation_duration = meter.create_histogram(
    name="certgen_certificate_generation_duration_seconds",
    description="Certificate template signing duration in seconds",
    unit="s",
)

# Encoder counters
pem_encoded_total = meter.create_counter(
    name="certgen_pem_encoded_total",
    description="Total PEM blocks encoded by kind",
    unit="1",
)


class GeneratorMetrics:
    """Facade for generator metrics with proper labels."""

    def record_key_generated(self) -> None:
        """Record RSA key generation."""
        keys_generated_total.add(1)

    def record_certificate_generated(self, duration_seconds: float) -> None:
        """Record certificate generation with duration."""
        certificates_generated_total.add(1)
        certificate_generation_duration.record(duration_seconds)

    def record_failure(self, stage: str) -> None:
        """Record a failure. Labels: stage=random|key|build|parse|encode"""
        generation_failures_total.add(1, {"stage": stage})

    def record_pem_encoded(self, kind: str) -> None:
        """Record PEM encoding. Labels: kind=<PEM block type>"""
        pem_encoded_total.add(1, {"kind": kind})


# Singleton instance
generator_metrics = GeneratorMetrics()
