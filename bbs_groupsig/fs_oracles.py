"""
Fiat-Shamir Random Oracle
=========================

This module implements the challenge oracle that makes the signer's
Σ-protocol non-interactive.

Random Oracle:
--------------
- H_c: Hash the three signature commitments and the five proof commitments
  to the challenge scalar c.

Transcript layout:
------------------
    t1 ‖ t2 ‖ t3 ‖ r1 ‖ r2 ‖ r3 ‖ r4 ‖ r5 [‖ message]

Each element is written with its canonical encoding (utils.serialize_element).
Nothing is length-prefixed: every element of one type has a fixed width, and
the message, if any, is always last.

Challenge derivation:
---------------------
The SHA-256 digest is read as four big-endian 64-bit limbs, most significant
first, forming a 256-bit integer. The integer is reduced modulo the group
order before it becomes a scalar, so distinct digests below p never alias.
"""

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1, GT
from typing import Sequence
import hashlib
import struct

from .utils import serialize_element

_LIMBS = 4


def serialize_transcript(elements: Sequence, group: PairingGroup, message: bytes = b"") -> bytes:
    """
    Concatenate the canonical encodings of ``elements`` in the given order.

    Parameters
    ----------
    elements : Sequence
        Group elements (G1, G2, GT) or scalars, in transcript order
    group : PairingGroup
        The pairing group
    message : bytes, optional
        Message bound to the transcript, appended after all elements

    Returns
    -------
    bytes
        The transcript bytes
    """
    result = b"".join(serialize_element(elem, group) for elem in elements)
    return result + message


def hash_to_challenge(data: bytes, group: PairingGroup) -> ZR:
    """
    SHA-256 ``data`` and map the digest to a scalar in Z_p.

    The digest is unpacked as four big-endian unsigned 64-bit limbs and
    recombined as limbs[0]·2^192 + limbs[1]·2^128 + limbs[2]·2^64 + limbs[3],
    then reduced modulo p.
    """
    digest = hashlib.sha256(data).digest()
    limbs = struct.unpack(">%dQ" % _LIMBS, digest)

    value = 0
    for limb in limbs:
        value = (value << 64) | limb

    return group.init(ZR, value % group.order())


def H_c(t1: G1, t2: G1, t3: G1, r1: G1, r2: G1, r3: GT, r4: G1, r5: G1,
        group: PairingGroup, message: bytes = b"") -> ZR:
    """
    Random oracle H_c: the Fiat-Shamir challenge of a group signature.

    Parameters
    ----------
    t1, t2, t3 : G1
        The signature commitments T1 = u^a, T2 = v^b, T3 = A · h^{a+b}
    r1, r2 : G1
        Blinding commitments for a and b (u^{r_a}, v^{r_b})
    r3 : GT
        The linearised pairing commitment
    r4, r5 : G1
        Commitments tying x to δ1 = a·x and δ2 = b·x
    group : PairingGroup
        The pairing group
    message : bytes, optional
        Message the signature is bound to

    Returns
    -------
    ZR
        The challenge c

    Notes
    -----
    The signer and the verifier must call this with the same argument order;
    the order is part of the wire format.
    """
    data = serialize_transcript([t1, t2, t3, r1, r2, r3, r4, r5], group, message)
    return hash_to_challenge(data, group)
