"""
Signature Verification
======================

The verifier rebuilds the five proof commitments an honest signer would
have produced from the responses and the challenge, hashes them with the
signature commitments, and compares the result with c.

Reconstruction:
---------------
    R1' = u^{s_a} / T1^c
    R2' = v^{s_b} / T2^c
    R3' = e(T3, g2)^{s_x} · (e(T3, w) / e(g1, g2))^c
          / (e(h, w)^{s_a + s_b} · e(h, g2)^{s_δ1 + s_δ2})
    R4' = T1^{s_x} / u^{s_δ1}
    R5' = T2^{s_x} / v^{s_δ2}

Accept iff H_c(T1, T2, T3, R1', R2', R3', R4', R5') = c.

R3' holds only if T3 / h^{a+b} is a valid credential A with
e(A, w · g2^x) = e(g1, g2).
"""

import logging

from charm.toolbox.pairinggroup import pair

from .exceptions import InvalidSignatureError
from .fs_oracles import H_c
from .structures import GroupPublicKey, Signature
from .utils import div, multiexp

logger = logging.getLogger(__name__)


def recompute_commitments(sig: Signature, gpk: GroupPublicKey) -> dict:
    """
    Recompute (R1', R2', R3', R4', R5') from the signature and public key.

    Returns
    -------
    dict
        Keys 'r1', 'r2', 'r3', 'r4', 'r5'; 'r3' is in GT, the rest in G1.
    """
    c = sig.c

    r1 = div(gpk.u ** sig.sa, sig.t1 ** c)
    r2 = div(gpk.v ** sig.sb, sig.t2 ** c)

    a1 = pair(sig.t3, gpk.g2)
    a2 = pair(gpk.h, gpk.w)
    a3 = pair(gpk.h, gpk.g2)
    a4 = pair(sig.t3, gpk.w)
    a5 = pair(gpk.g1, gpk.g2)

    numerator = multiexp([a1, div(a4, a5)], [sig.sx, c])
    denominator = multiexp([a2, a3], [sig.sa + sig.sb, sig.s_delta1 + sig.s_delta2])
    r3 = div(numerator, denominator)

    r4 = div(sig.t1 ** sig.sx, gpk.u ** sig.s_delta1)
    r5 = div(sig.t2 ** sig.sx, gpk.v ** sig.s_delta2)

    return {'r1': r1, 'r2': r2, 'r3': r3, 'r4': r4, 'r5': r5}


def verify(sig: Signature, gpk: GroupPublicKey, message: bytes = b"") -> bool:
    """
    Verify a group signature against a group public key.

    Parameters
    ----------
    sig : Signature
        The signature to check
    gpk : GroupPublicKey
        The group public key it should verify under
    message : bytes, optional
        The message the signature was bound to

    Returns
    -------
    bool
        True if the recomputed challenge equals sig.c, False otherwise.
        A forged, tampered or wrong-key signature is a normal False.
    """
    r = recompute_commitments(sig, gpk)
    c_v = H_c(sig.t1, sig.t2, sig.t3, r['r1'], r['r2'], r['r3'], r['r4'], r['r5'],
              gpk.group, message)

    accepted = c_v == sig.c
    logger.debug("Group signature %s", "accepted" if accepted else "rejected")
    return accepted


def verify_or_raise(sig: Signature, gpk: GroupPublicKey, message: bytes = b"") -> None:
    """Like verify(), but raise InvalidSignatureError on reject."""
    if not verify(sig, gpk, message):
        raise InvalidSignatureError("group signature does not verify under this public key")
