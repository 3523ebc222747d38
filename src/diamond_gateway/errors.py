"""Error kinds raised by the gateway.

Configuration and encoding errors are raised before any network round trip.
Transport and revert errors wrap the underlying exception, which stays
available as ``__cause__``.
"""

from __future__ import annotations


class GatewayError(Exception):
    kind = "gateway"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(GatewayError):
    kind = "configuration"


class UnknownFacetError(ConfigurationError):
    def __init__(self, facet_kind: object) -> None:
        self.facet_kind = facet_kind
        super().__init__(f"unknown facet kind: {facet_kind!r}")


class AddressNotDeployedError(ConfigurationError):
    def __init__(self, chain: str, facet_kind: str) -> None:
        self.chain = chain
        self.facet_kind = facet_kind
        super().__init__(f"{facet_kind} is not deployed on {chain}")


class ExecutionContextError(ConfigurationError):
    pass


class EncodingError(GatewayError):
    kind = "encoding"


class TransportError(GatewayError):
    kind = "transport"


class ContractRevertError(GatewayError):
    kind = "revert"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class ResolutionError(GatewayError):
    kind = "resolution"


class ParseError(GatewayError):
    kind = "parse"
