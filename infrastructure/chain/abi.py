"""Contract ABIs (only the entries this service calls)."""

DRAWING_NFT_ABI: list[dict] = [
    {
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "uri", "type": "string"},
        ],
        "name": "mint",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "to", "type": "address"},
            {"indexed": True, "name": "tokenId", "type": "uint256"},
            {"indexed": False, "name": "tokenURI", "type": "string"},
        ],
        "name": "DrawingMinted",
        "type": "event",
    },
]

ID_REGISTRY_ABI: list[dict] = [
    {
        "inputs": [{"name": "fid", "type": "uint256"}],
        "name": "custodyOf",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
]
