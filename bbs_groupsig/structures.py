"""
Key and signature structures.

Every structure keeps a reference to the PairingGroup its elements live in;
the group is excluded from comparison and from every encoding. ``FIELDS``
lists the declared field order, which is also the order of the byte
encoding in serialization.py.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, NamedTuple, Tuple

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1, G2


@dataclass(frozen=True)
class GroupPublicKey:
    """gpk = (h, u, v, w, g1, g2) with h = u^ξ2, w = g2^γ."""

    FIELDS: ClassVar[Tuple[str, ...]] = ('h', 'u', 'v', 'w', 'g1', 'g2')
    KINDS: ClassVar[Tuple[Any, ...]] = (G1, G1, G1, G2, G1, G2)

    h: G1
    u: G1
    v: G1
    w: G2
    g1: G1
    g2: G2
    group: PairingGroup = field(compare=False, repr=False)


@dataclass(frozen=True)
class GroupSecretKey:
    """gsk = (ξ1, ξ2, γ). ξ1, ξ2 open signatures; γ issues credentials."""

    FIELDS: ClassVar[Tuple[str, ...]] = ('xi1', 'xi2', 'gamma')
    KINDS: ClassVar[Tuple[Any, ...]] = (ZR, ZR, ZR)

    xi1: ZR
    xi2: ZR
    gamma: ZR
    group: PairingGroup = field(compare=False, repr=False)

    def __repr__(self) -> str:
        return "GroupSecretKey(<redacted>)"


@dataclass(frozen=True)
class MemberCredential:
    """usk = (x, A) with A = g1^{1/(γ+x)}."""

    FIELDS: ClassVar[Tuple[str, ...]] = ('x', 'A')
    KINDS: ClassVar[Tuple[Any, ...]] = (ZR, G1)

    x: ZR
    A: G1
    group: PairingGroup = field(compare=False, repr=False)

    def __repr__(self) -> str:
        return "MemberCredential(<redacted>)"


@dataclass(frozen=True)
class Signature:
    """σ = (T1, T2, T3, c, s_a, s_b, s_x, s_δ1, s_δ2)."""

    FIELDS: ClassVar[Tuple[str, ...]] = (
        't1', 't2', 't3', 'c', 'sa', 'sb', 'sx', 's_delta1', 's_delta2'
    )
    KINDS: ClassVar[Tuple[Any, ...]] = (G1, G1, G1, ZR, ZR, ZR, ZR, ZR, ZR)

    t1: G1
    t2: G1
    t3: G1
    c: ZR
    sa: ZR
    sb: ZR
    sx: ZR
    s_delta1: ZR
    s_delta2: ZR
    group: PairingGroup = field(compare=False, repr=False)


class SetupResult(NamedTuple):
    gpk: GroupPublicKey
    gsk: GroupSecretKey
