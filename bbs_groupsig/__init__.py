"""
Short Group Signatures
======================

A pairing-based group signature scheme: any member of a group signs on
behalf of the group, verifiers learn only that *some* member signed, and
the group manager can open a signature to the member's credential.

Members hold Boneh-Boyen credentials A = g1^{1/(γ+x)}; a signature is a
Fiat-Shamir (SHA-256) proof of knowledge of such a credential, built on
charm-crypto with Type-3 asymmetric pairing curves.

Modules:
--------
- groups: Pairing group initialisation, canonical generators, sampling
- structures: GroupPublicKey, GroupSecretKey, MemberCredential, Signature
- keygen: Group key generation (setup) and credential issuance (issue)
- proofs: Two-phase signing (commit, respond) and sign
- verify: Signature verification
- opening: Opening a signature to the signer's credential
- fs_oracles: Fiat-Shamir challenge oracle
- serialization: Byte and JSON encodings
- utils: Group helpers (multi-exponentiation, division, element encoding)

Usage:
------
    from bbs_groupsig import setup_group, setup, issue, sign, verify, open_signature

    params = setup_group('MNT224')
    gpk, gsk = setup(params)
    cred = issue(gsk, gpk)

    sig = sign(cred, gpk, message=b"hello")
    assert verify(sig, gpk, message=b"hello")
    assert open_signature(sig, gsk) == cred.A
"""

__version__ = "0.1.0"

from .groups import setup_group, get_generators
from .structures import GroupPublicKey, GroupSecretKey, MemberCredential, Signature, SetupResult
from .keygen import setup, issue, check_credential
from .proofs import commit, respond, sign
from .verify import verify, verify_or_raise
from .opening import open_signature, is_signed_member, trace
from .exceptions import (
    GroupSigError, DegenerateCredentialError, InvalidSignatureError, SerializationError
)

__all__ = [
    'setup_group', 'get_generators',
    'GroupPublicKey', 'GroupSecretKey', 'MemberCredential', 'Signature', 'SetupResult',
    'setup', 'issue', 'check_credential',
    'commit', 'respond', 'sign',
    'verify', 'verify_or_raise',
    'open_signature', 'is_signed_member', 'trace',
    'GroupSigError', 'DegenerateCredentialError', 'InvalidSignatureError', 'SerializationError',
]
