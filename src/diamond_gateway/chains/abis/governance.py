# --- GOVERNANCE A FACET (proposal lifecycle, voting, streaks) ---

_PROPOSAL_ID_INPUT = {"internalType": "uint256", "name": "proposalId", "type": "uint256"}

GOVERNANCE_A_FACET_ABI = [
    {
        "inputs": [
            {"internalType": "address[]", "name": "targets", "type": "address[]"},
            {"internalType": "uint256[]", "name": "values", "type": "uint256[]"},
            {"internalType": "string[]", "name": "signatures", "type": "string[]"},
            {"internalType": "bytes[]", "name": "calldatas", "type": "bytes[]"},
            {"internalType": "string", "name": "metadataURI", "type": "string"},
        ],
        "name": "propose",
        "outputs": [{"internalType": "uint256", "name": "proposalId", "type": "uint256"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            _PROPOSAL_ID_INPUT,
            {"internalType": "uint8", "name": "support", "type": "uint8"},
        ],
        "name": "castVote",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [_PROPOSAL_ID_INPUT],
        "name": "endVotingTest",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [_PROPOSAL_ID_INPUT],
        "name": "execute",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [_PROPOSAL_ID_INPUT],
        "name": "isVotingFinalized",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [_PROPOSAL_ID_INPUT],
        "name": "getProposal",
        "outputs": [
            {
                "components": [
                    {"internalType": "uint256", "name": "id", "type": "uint256"},
                    {"internalType": "address", "name": "proposer", "type": "address"},
                    {"internalType": "address[]", "name": "targets", "type": "address[]"},
                    {"internalType": "uint256[]", "name": "values", "type": "uint256[]"},
                    {"internalType": "string[]", "name": "signatures", "type": "string[]"},
                    {"internalType": "bytes[]", "name": "calldatas", "type": "bytes[]"},
                    {"internalType": "string", "name": "metadataURI", "type": "string"},
                    {"internalType": "bool", "name": "executed", "type": "bool"},
                ],
                "internalType": "struct GovernanceStorage.Proposal",
                "name": "",
                "type": "tuple",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "getProposalCount",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [_PROPOSAL_ID_INPUT],
        "name": "getTotalVotes",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [_PROPOSAL_ID_INPUT],
        "name": "getVoteSupport",
        "outputs": [
            {"internalType": "uint256", "name": "againstVotes", "type": "uint256"},
            {"internalType": "uint256", "name": "forVotes", "type": "uint256"},
            {"internalType": "uint256", "name": "abstainVotes", "type": "uint256"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "getQuorum",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "getProposalDuration",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "address", "name": "voter", "type": "address"}],
        "name": "getVotingStreak",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "address", "name": "voter", "type": "address"}],
        "name": "getVotingStreakMultiplier",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "uint256", "name": "proposalId", "type": "uint256"},
            {"indexed": True, "internalType": "address", "name": "proposer", "type": "address"},
            {"indexed": False, "internalType": "string", "name": "metadataURI", "type": "string"},
        ],
        "name": "ProposalCreated",
        "type": "event",
    },
]
