from __future__ import annotations

from diamond_gateway.errors import ExecutionContextError
from diamond_gateway.evm.contexts import SigningContext


def require_signer(signer: object) -> SigningContext:
    if not isinstance(signer, SigningContext):
        raise ExecutionContextError("write operations require a signing context")
    return signer
