# --- MEMBERSHIP FACET (mint configuration, mounted on the diamond) ---

_MEMBERSHIP_INPUT = {"internalType": "address", "name": "membership", "type": "address"}

MEMBERSHIP_FACET_ABI = [
    {
        "inputs": [_MEMBERSHIP_INPUT],
        "name": "getMintPrice",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [_MEMBERSHIP_INPUT],
        "name": "getMaxSupply",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            _MEMBERSHIP_INPUT,
            {"internalType": "uint256", "name": "maxSupply", "type": "uint256"},
        ],
        "name": "setMaxSupply",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            _MEMBERSHIP_INPUT,
            {"internalType": "uint256", "name": "mintPrice", "type": "uint256"},
        ],
        "name": "setMintPrice",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            _MEMBERSHIP_INPUT,
            {"internalType": "address", "name": "to", "type": "address"},
        ],
        "name": "mint",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
]

# --- MEMBERSHIP CONTRACT (ERC-721 membership token) ---

MEMBERSHIP_CONTRACT_ABI = [
    {
        "inputs": [{"internalType": "address", "name": "owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "uint256", "name": "tokenId", "type": "uint256"}],
        "name": "ownerOf",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "uint256", "name": "tokenId", "type": "uint256"}],
        "name": "tokenURI",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "totalSupply",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "name",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "symbol",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
]
