"""
Sample Scripts
==============

Standard output script templates, usable as starting points in the
workspace (Workspace.load_sample) and from the command line
(``btcasm --sample``).

Each entry gives the ASM text and, where fixed, its expected hex.
"""

SAMPLES: dict[str, dict[str, str]] = {
    "p2pkh": {
        "title": "P2PKH (legacy)",
        "asm": "OP_DUP OP_HASH160 <00112233445566778899aabbccddeeff00112233> "
               "OP_EQUALVERIFY OP_CHECKSIG",
        "hex": "76a91400112233445566778899aabbccddeeff0011223388ac",
    },
    "p2sh": {
        "title": "P2SH (redeem-hash)",
        "asm": "OP_HASH160 <16b000aabbccddeeff00112233445566778899aa> OP_EQUAL",
        "hex": "a91416b000aabbccddeeff00112233445566778899aa87",
    },
    "p2wpkh": {
        "title": "P2WPKH (v0)",
        "asm": "0 <00112233445566778899aabbccddeeff00112233>",
        "hex": "001400112233445566778899aabbccddeeff00112233",
    },
    "multisig": {
        "title": "2-of-3 Multisig (bare)",
        "asm": "2 "
               "<02" + "a1" * 32 + "> "
               "<03" + "b2" * 32 + "> "
               "<02" + "c3" * 32 + "> "
               "3 OP_CHECKMULTISIG",
    },
}


def sample_asm(name: str) -> str:
    """
    Return the ASM text of a sample.

    Raises:
        KeyError: If there is no sample called ``name``
    """
    return SAMPLES[name]["asm"]
