"""
Utility Functions
=================

Group helpers shared by the signer, the verifier and the opener.

Key Operations:
- Multi-exponentiation: Compute ∏ g_i^{e_i} in any group
- Division: numerator · denominator^{-1} in G1 or GT
- Serialization: Canonical element encodings used by the transcript and by
  the structure encodings

According to charm-crypto documentation:
- Group operations use * for multiplication, ** for exponentiation
- Inverse is computed as elem ** -1
- Pairing is computed as pair(g1_elem, g2_elem)
- group.serialize() / group.deserialize() give a deterministic encoding per element
"""

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1, G2, GT
from typing import List, Union


def multiexp(bases: List[Union[G1, G2, GT]], exponents: List[ZR]) -> Union[G1, G2, GT]:
    """
    Compute multi-exponentiation: ∏ bases[i]^{exponents[i]}.

    Formula:
    --------
    result = ∏_{i=0}^{len(bases)-1} bases[i]^{exponents[i]}

    Parameters
    ----------
    bases : List[G1 | G2 | GT]
        Non-empty list of elements of one group
    exponents : List[ZR]
        List of exponents in Z_p

    Returns
    -------
    G1 | G2 | GT
        The product ∏ bases[i]^{exponents[i]}

    Notes
    -----
    This does NOT use any special multi-exponentiation algorithm; it computes
    the product directly.
    """
    if len(bases) == 0:
        raise ValueError("multiexp needs at least one base")

    if len(bases) != len(exponents):
        raise ValueError(f"bases and exponents must have same length: {len(bases)} != {len(exponents)}")

    result = bases[0] ** exponents[0]
    for base, exp in zip(bases[1:], exponents[1:]):
        result *= base ** exp

    return result


def div(numerator, denominator):
    """
    Compute numerator / denominator in G1, G2 or GT.

    Implemented as numerator * denominator^{-1}; with additive notation this
    is numerator - denominator.
    """
    return numerator * (denominator ** -1)


def is_zero(s: ZR, group: PairingGroup) -> bool:
    """True if the scalar is the additive identity of Z_p."""
    return s == group.init(ZR, 0)


def serialize_element(elem: Union[G1, G2, GT, ZR], group: PairingGroup) -> bytes:
    """
    Canonical encoding of a group element or scalar.

    Equal elements always serialize to equal bytes, and all elements of one
    type on one curve share the same encoded length.
    """
    return group.serialize(elem)


def deserialize_element(data: bytes, group: PairingGroup) -> Union[G1, G2, GT, ZR]:
    """Inverse of serialize_element()."""
    return group.deserialize(data)
