from backend.src.certgen.cli import default, keypair
from backend.src.certgen.generate import CertificateGenerator, TLSCertificate
from backend.src.certgen.generate.pem import PemEncodable
from backend.src.shared.config import Settings

# Pydantic Settings
Settings.model_config
Settings.APP_ENV

# Public API used by embedding callers
CertificateGenerator.common_name
TLSCertificate.server_context
PemEncodable

# Click commands
keypair
default
