from tuyalink.transports.base import Transport
from tuyalink.transports.cloud.transport import CloudTransport

__all__ = ["CloudTransport", "Transport"]
