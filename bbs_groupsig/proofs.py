"""
Signature Generation
====================

This module implements the signer: a Fiat-Shamir transformed Σ-protocol
proving knowledge of a credential (x, A) and of the blinding exponents that
hide it, without revealing either.

Blinded commitment (run once per generator g ∈ {u, v}, shared r_x):
---------------------------------------------------------------------
    a, r_a, r_δ ←$ Z_p
    T      = g^a
    δ      = a · x
    R_a    = g^{r_a}
    R_δ    = T^{r_x} · g^{-r_δ}

    response:  s_a = r_a + c·a,   s_δ = r_δ + c·δ

Combined commitments:
---------------------
    T3 = A · h^{a_u + a_v}
    R3 = e(T3, g2)^{r_x} · e(h, w)^{-(r_a,u + r_a,v)} · e(h, g2)^{-(r_δ,u + r_δ,v)}

Challenge:
----------
    c = H_c(T1, T2, T3, R_a,u, R_a,v, R3, R_δ,u, R_δ,v)

Response:
---------
    s_x = r_x + c·x

The two phases are exposed separately (commit() then respond()) so that
the challenge can come from somewhere other than the local hash. A
SigningCommitment must be passed to respond() exactly once; answering two
different challenges from one commitment reveals x.
"""

import logging
from dataclasses import dataclass, field

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1, GT, pair

from .fs_oracles import H_c
from .groups import default_rng, random_scalar
from .structures import GroupPublicKey, MemberCredential, Signature
from .utils import div, multiexp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorCommitment:
    """Phase-1 state of one blinded commitment against ``generator``."""

    generator: G1
    a: ZR
    ra: ZR
    r_delta: ZR
    t: G1
    delta: ZR
    r_first: G1
    r_second: G1


@dataclass(frozen=True)
class GeneratorResponse:
    s: ZR
    s_delta: ZR


@dataclass(frozen=True)
class SigningCommitment:
    """
    Phase-1 state of a whole signature.

    Holds the secret x and every blinding exponent, so it must never leave
    the signer.

    respond() accepts it exactly once: answering two challenges from the
    same commitment reveals x.
    """

    x: ZR
    rx: ZR
    cu: GeneratorCommitment
    cv: GeneratorCommitment
    t3: G1
    r3: GT
    group: PairingGroup = field(compare=False, repr=False)
    _consumed: bool = field(default=False, init=False, compare=False, repr=False)

    def challenge(self, message: bytes = b"") -> ZR:
        """Fiat-Shamir challenge over the full commitment set."""
        return H_c(
            self.cu.t, self.cv.t, self.t3,
            self.cu.r_first, self.cv.r_first,
            self.r3,
            self.cu.r_second, self.cv.r_second,
            self.group, message,
        )

    def _consume(self) -> None:
        if self._consumed:
            raise ValueError("signing commitment was already used to answer a challenge")
        object.__setattr__(self, '_consumed', True)


def commit_generator(x: ZR, rx: ZR, generator: G1, group: PairingGroup, rng) -> GeneratorCommitment:
    """
    Blinded commitment to x against one generator.

    Parameters
    ----------
    x : ZR
        The member secret
    rx : ZR
        Blinding for x; the caller passes the same value for both generators
    generator : G1
        u or v from the group public key
    group : PairingGroup
        The pairing group
    rng : object
        Randomness source with a randrange() method

    Returns
    -------
    GeneratorCommitment
        (generator, a, r_a, r_δ, T, δ, R_a, R_δ)
    """
    a = random_scalar(group, rng)
    ra = random_scalar(group, rng)
    r_delta = random_scalar(group, rng)

    t = generator ** a
    delta = a * x
    r_first = generator ** ra
    r_second = div(t ** rx, generator ** r_delta)

    return GeneratorCommitment(
        generator=generator,
        a=a,
        ra=ra,
        r_delta=r_delta,
        t=t,
        delta=delta,
        r_first=r_first,
        r_second=r_second,
    )


def respond_generator(commitment: GeneratorCommitment, c: ZR) -> GeneratorResponse:
    """s = r_a + c·a,  s_δ = r_δ + c·δ."""
    s = commitment.ra + c * commitment.a
    s_delta = commitment.r_delta + c * commitment.delta
    return GeneratorResponse(s=s, s_delta=s_delta)


def commit(cred: MemberCredential, gpk: GroupPublicKey, rng=None) -> SigningCommitment:
    """
    Phase 1: sample all blinding values and compute every commitment.

    The pairings e(T3, g2), e(h, w) and e(h, g2) are computed here and are
    the only pairings on the signing path.
    """
    if rng is None:
        rng = default_rng()

    group = gpk.group
    x = cred.x

    rx = random_scalar(group, rng)
    cu = commit_generator(x, rx, gpk.u, group, rng)
    cv = commit_generator(x, rx, gpk.v, group, rng)

    t3 = cred.A * (gpk.h ** (cu.a + cv.a))

    a1 = pair(t3, gpk.g2)
    a2 = pair(gpk.h, gpk.w)
    a3 = pair(gpk.h, gpk.g2)

    # R3 = a1^{r_x} / (a2^{r_a,u + r_a,v} · a3^{r_δ,u + r_δ,v})
    r3 = div(a1 ** rx, multiexp([a2, a3], [cu.ra + cv.ra, cu.r_delta + cv.r_delta]))

    return SigningCommitment(x=x, rx=rx, cu=cu, cv=cv, t3=t3, r3=r3, group=group)


def respond(commitment: SigningCommitment, c: ZR) -> Signature:
    """
    Phase 2: answer challenge c and assemble the signature.

    Raises ValueError if ``commitment`` has already been answered; a fresh
    commit() is needed for every signature.
    """
    commitment._consume()
    sx = commitment.rx + c * commitment.x

    su = respond_generator(commitment.cu, c)
    sv = respond_generator(commitment.cv, c)

    return Signature(
        t1=commitment.cu.t,
        t2=commitment.cv.t,
        t3=commitment.t3,
        c=c,
        sa=su.s,
        sb=sv.s,
        sx=sx,
        s_delta1=su.s_delta,
        s_delta2=sv.s_delta,
        group=commitment.group,
    )


def sign(cred: MemberCredential, gpk: GroupPublicKey, rng=None, message: bytes = b"") -> Signature:
    """
    Produce a group signature with credential ``cred``.

    Parameters
    ----------
    cred : MemberCredential
        The signer's credential (x, A)
    gpk : GroupPublicKey
        The group public key
    rng : optional
        Randomness source with a randrange() method
    message : bytes, optional
        Message to bind into the challenge. With the default empty message
        the challenge covers the eight commitments only.

    Returns
    -------
    Signature
        σ = (T1, T2, T3, c, s_a, s_b, s_x, s_δ1, s_δ2)
    """
    commitment = commit(cred, gpk, rng)
    c = commitment.challenge(message)
    signature = respond(commitment, c)
    logger.debug("Produced group signature over %d message bytes", len(message))
    return signature
