"""MusicChain: proof-of-authorship registry for audio works on an EVM ledger and IPFS."""

__version__ = "0.1.0"
