# --- BRAND FACET ---


def _getter(name: str) -> dict:
    return {
        "inputs": [],
        "name": name,
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    }


def _setter(name: str, argument: str) -> dict:
    return {
        "inputs": [{"internalType": "string", "name": argument, "type": "string"}],
        "name": name,
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    }


BRAND_FACET_ABI = [
    _getter("getBrandName"),
    _getter("getBrandURI"),
    _getter("getBrandMetadataURI"),
    _setter("setBrandName", "brandName"),
    _setter("setBrandURI", "brandURI"),
    _setter("setBrandMetadataURI", "brandMetadataURI"),
]
