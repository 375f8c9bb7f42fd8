from .dry_run_transport import DryRunTransport
from .http_transport import HttpTransport, RequestsTransport
from .models import RequestDescriptor

__all__ = ["DryRunTransport", "HttpTransport", "RequestDescriptor", "RequestsTransport"]
