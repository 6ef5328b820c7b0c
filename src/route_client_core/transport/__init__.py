"""Transport layer: request construction, dispatch and one-shot outcome delivery.

Modules:
    completion: Completion, the single-delivery outcome channel of a call
    dispatcher: Dispatcher, which resolves target/proxy, builds headers and
        bodies, injects auth, sends through httpx and classifies the response
"""

from route_client_core.transport.completion import Completion
from route_client_core.transport.dispatcher import Dispatcher, OutboundRequest

__all__ = ["Completion", "Dispatcher", "OutboundRequest"]
