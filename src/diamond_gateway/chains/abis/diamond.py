# --- DIAMOND (EIP-2535) CUT, LOUPE AND OWNERSHIP FACETS ---

_FACET_CUT_COMPONENTS = [
    {"internalType": "address", "name": "facetAddress", "type": "address"},
    {"internalType": "enum IDiamondCut.FacetCutAction", "name": "action", "type": "uint8"},
    {"internalType": "bytes4[]", "name": "functionSelectors", "type": "bytes4[]"},
]

DIAMOND_CUT_FACET_ABI = [
    {
        "inputs": [
            {
                "components": _FACET_CUT_COMPONENTS,
                "internalType": "struct IDiamondCut.FacetCut[]",
                "name": "_diamondCut",
                "type": "tuple[]",
            },
            {"internalType": "address", "name": "_init", "type": "address"},
            {"internalType": "bytes", "name": "_calldata", "type": "bytes"},
        ],
        "name": "diamondCut",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

DIAMOND_LOUPE_FACET_ABI = [
    {
        "inputs": [],
        "name": "facets",
        "outputs": [
            {
                "components": [
                    {"internalType": "address", "name": "facetAddress", "type": "address"},
                    {"internalType": "bytes4[]", "name": "functionSelectors", "type": "bytes4[]"},
                ],
                "internalType": "struct IDiamondLoupe.Facet[]",
                "name": "facets_",
                "type": "tuple[]",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "address", "name": "_facet", "type": "address"}],
        "name": "facetFunctionSelectors",
        "outputs": [{"internalType": "bytes4[]", "name": "facetFunctionSelectors_", "type": "bytes4[]"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "facetAddresses",
        "outputs": [{"internalType": "address[]", "name": "facetAddresses_", "type": "address[]"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "bytes4", "name": "_functionSelector", "type": "bytes4"}],
        "name": "facetAddress",
        "outputs": [{"internalType": "address", "name": "facetAddress_", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "bytes4", "name": "_interfaceId", "type": "bytes4"}],
        "name": "supportsInterface",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function",
    },
]

OWNERSHIP_FACET_ABI = [
    {
        "inputs": [],
        "name": "owner",
        "outputs": [{"internalType": "address", "name": "owner_", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "address", "name": "_newOwner", "type": "address"}],
        "name": "transferOwnership",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]
