"""ABI of the MusicCopyrightRegistry functions this package calls."""

from typing import Any


def _fn(
    name: str,
    inputs: list[tuple[str, str]],
    outputs: list[tuple[str, str]],
    mutability: str,
) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "outputs": [{"name": n, "type": t} for n, t in outputs],
        "stateMutability": mutability,
    }


REGISTRY_ABI: list[dict[str, Any]] = [
    _fn(
        "registerSong",
        [("title", "string"), ("artist", "string"), ("ipfsHash", "string"), ("license", "string")],
        [("", "uint256")],
        "payable",
    ),
    _fn(
        "getSong",
        [("songId", "uint256")],
        [
            ("id", "uint256"),
            ("registrant", "address"),
            ("title", "string"),
            ("artist", "string"),
            ("ipfsHash", "string"),
            ("license", "string"),
            ("timestamp", "uint256"),
            ("accessCount", "uint256"),
            ("isActive", "bool"),
        ],
        "view",
    ),
    _fn("getSongsByRegistrant", [("registrant", "address")], [("", "uint256[]")], "view"),
    _fn("getTotalSongs", [], [("", "uint256")], "view"),
    _fn("registrationFee", [], [("", "uint256")], "view"),
    _fn("accessFee", [], [("", "uint256")], "view"),
    _fn("payForAccess", [("songId", "uint256")], [], "payable"),
]
