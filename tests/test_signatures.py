"""
Test Suite for Signing, Verification and Opening
=================================================

Each group of tests checks one property of the scheme:

1. Completeness: honestly generated signatures verify
2. Opening: a valid signature opens to the signer's A
3. Soundness under tamper: changing any signature field is rejected
4. Key binding: signatures do not verify under another group's key
5. Message binding: signatures do not verify for another message
6. Two-phase signing: commit() / respond() produce the same structure as sign()
"""

import random
from dataclasses import replace

import pytest
from charm.toolbox.pairinggroup import ZR

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from bbs_groupsig.groups import setup_group, get_generators, random_scalar
from bbs_groupsig.keygen import setup, issue
from bbs_groupsig.proofs import commit, respond, sign, commit_generator, respond_generator
from bbs_groupsig.verify import verify, verify_or_raise, recompute_commitments
from bbs_groupsig.opening import open_signature, is_signed_member, trace
from bbs_groupsig.exceptions import InvalidSignatureError
from bbs_groupsig.structures import Signature
from bbs_groupsig.utils import serialize_element


# Fixtures for common setup
@pytest.fixture(scope="module")
def pairing_params():
    """Initialize pairing group."""
    return setup_group('MNT224')


@pytest.fixture(scope="module")
def group_keys(pairing_params):
    """Group key pair from a fixed seed."""
    return setup(pairing_params, random.Random(2024))


@pytest.fixture(scope="module")
def member(group_keys):
    gpk, gsk = group_keys
    return issue(gsk, gpk, random.Random(1))


@pytest.fixture(scope="module")
def signature(group_keys, member):
    gpk, _ = group_keys
    return sign(member, gpk, random.Random(2))


# ============================================================================
# Completeness and opening
# ============================================================================

@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_completeness_for_several_seeds(pairing_params, seed):
    rng = random.Random(seed)
    gpk, gsk = setup(pairing_params, rng)
    cred = issue(gsk, gpk, rng)
    sig = sign(cred, gpk, rng)

    assert verify(sig, gpk)
    assert open_signature(sig, gsk) == cred.A


def test_completeness_with_system_rng(group_keys, member):
    gpk, _ = group_keys
    assert verify(sign(member, gpk), gpk)


def test_fixed_seed_scenario(pairing_params):
    """
    Fixed-seed walk-through: verify accepts, open recovers A byte-for-byte,
    and c + 1 is rejected.
    """
    rng = random.Random(0xC0FFEE)
    gpk, gsk = setup(pairing_params, rng)
    group = gpk.group
    cred = issue(gsk, gpk, rng)
    message = b"fixed message context"

    sig = sign(cred, gpk, rng, message)
    assert verify(sig, gpk, message)

    opened = open_signature(sig, gsk)
    assert serialize_element(opened, group) == serialize_element(cred.A, group)

    bumped = replace(sig, c=sig.c + group.init(ZR, 1))
    assert not verify(bumped, gpk, message)


def test_is_signed_member(group_keys, member, signature):
    gpk, gsk = group_keys
    other = issue(gsk, gpk, random.Random(99))

    assert is_signed_member(member, signature, gsk)
    assert not is_signed_member(other, signature, gsk)


def test_trace_finds_signer_among_members(group_keys):
    gpk, gsk = group_keys
    group = gpk.group
    rng = random.Random(5)
    creds = [issue(gsk, gpk, rng) for _ in range(4)]
    registry = {serialize_element(c.A, group): f"member-{i}" for i, c in enumerate(creds)}

    for i, cred in enumerate(creds):
        sig = sign(cred, gpk, rng)
        assert trace(sig, gsk, registry) == f"member-{i}"


def test_trace_returns_none_for_unknown_member(group_keys, signature):
    _, gsk = group_keys
    assert trace(signature, gsk, {}) is None


def test_signatures_are_unlinkable_at_the_surface(group_keys, member):
    """Two signatures by one member share no commitment."""
    gpk, gsk = group_keys
    rng = random.Random(6)
    s1 = sign(member, gpk, rng)
    s2 = sign(member, gpk, rng)

    assert s1.t1 != s2.t1
    assert s1.t2 != s2.t2
    assert s1.t3 != s2.t3
    assert open_signature(s1, gsk) == open_signature(s2, gsk)


# ============================================================================
# Soundness under tamper
# ============================================================================

SCALAR_FIELDS = ['c', 'sa', 'sb', 'sx', 's_delta1', 's_delta2']
POINT_FIELDS = ['t1', 't2', 't3']


@pytest.mark.parametrize("name", SCALAR_FIELDS)
def test_tampered_scalar_is_rejected(group_keys, signature, name):
    gpk, _ = group_keys
    group = gpk.group
    tampered = replace(signature, **{name: getattr(signature, name) + group.init(ZR, 1)})

    assert verify(signature, gpk)
    assert not verify(tampered, gpk)


@pytest.mark.parametrize("name", POINT_FIELDS)
def test_tampered_point_is_rejected(group_keys, signature, name):
    gpk, _ = group_keys
    tampered = replace(signature, **{name: getattr(signature, name) * gpk.g1})

    assert not verify(tampered, gpk)


def test_verify_or_raise(group_keys, signature):
    gpk, _ = group_keys
    group = gpk.group
    verify_or_raise(signature, gpk)

    tampered = replace(signature, sx=signature.sx + group.init(ZR, 1))
    with pytest.raises(InvalidSignatureError):
        verify_or_raise(tampered, gpk)


# ============================================================================
# Key and message binding
# ============================================================================

def test_signature_rejected_under_other_group_key(pairing_params, group_keys, signature):
    gpk, _ = group_keys
    other_gpk, _ = setup(pairing_params, random.Random(31337))

    assert verify(signature, gpk)
    assert not verify(signature, other_gpk)


def test_signature_bound_to_message(group_keys, member):
    gpk, _ = group_keys
    sig = sign(member, gpk, random.Random(3), b"pay 10")

    assert verify(sig, gpk, b"pay 10")
    assert not verify(sig, gpk, b"pay 11")
    assert not verify(sig, gpk)


def test_credential_from_other_group_does_not_verify(pairing_params, group_keys):
    gpk, _ = group_keys
    rng = random.Random(4)
    other_gpk, other_gsk = setup(pairing_params, rng)
    outsider = issue(other_gsk, other_gpk, rng)

    sig = sign(outsider, gpk, rng)
    assert not verify(sig, gpk)


# ============================================================================
# Two-phase signing
# ============================================================================

def test_commit_then_respond_verifies(group_keys, member):
    gpk, gsk = group_keys
    commitment = commit(member, gpk, random.Random(11))
    c = commitment.challenge(b"staged")
    sig = respond(commitment, c)

    assert isinstance(sig, Signature)
    assert sig.c == c
    assert verify(sig, gpk, b"staged")
    assert open_signature(sig, gsk) == member.A


def test_commit_shares_rx_across_generators(group_keys, member):
    gpk, _ = group_keys
    commitment = commit(member, gpk, random.Random(12))

    for gen_commit, generator in ((commitment.cu, gpk.u), (commitment.cv, gpk.v)):
        assert gen_commit.generator == generator
        expected = (gen_commit.t ** commitment.rx) * ((generator ** gen_commit.r_delta) ** -1)
        assert gen_commit.r_second == expected

    assert commitment.cu.a != commitment.cv.a
    assert commitment.cu.ra != commitment.cv.ra
    assert commitment.cu.r_delta != commitment.cv.r_delta


def test_verifier_reconstructs_signer_commitments(group_keys, member):
    gpk, _ = group_keys
    commitment = commit(member, gpk, random.Random(13))
    sig = respond(commitment, commitment.challenge())

    r = recompute_commitments(sig, gpk)
    assert r['r1'] == commitment.cu.r_first
    assert r['r2'] == commitment.cv.r_first
    assert r['r3'] == commitment.r3
    assert r['r4'] == commitment.cu.r_second
    assert r['r5'] == commitment.cv.r_second


def test_respond_generator_equations(pairing_params):
    group = pairing_params['group']
    rng = random.Random(14)

    g1, _ = get_generators(group)
    x = random_scalar(group, rng)
    rx = random_scalar(group, rng)
    c = random_scalar(group, rng)

    gc = commit_generator(x, rx, g1, group, rng)
    resp = respond_generator(gc, c)

    assert gc.t == g1 ** gc.a
    assert gc.delta == gc.a * x
    assert gc.r_first == g1 ** gc.ra
    assert resp.s == gc.ra + c * gc.a
    assert resp.s_delta == gc.r_delta + c * gc.delta
    # g^{s} = R_a · T^{c}
    assert g1 ** resp.s == gc.r_first * (gc.t ** c)


def test_commitment_answers_only_one_challenge(group_keys, member):
    gpk, _ = group_keys
    group = gpk.group
    commitment = commit(member, gpk, random.Random(15))
    c = commitment.challenge()
    sig = respond(commitment, c)

    with pytest.raises(ValueError, match="already used"):
        respond(commitment, c + group.init(ZR, 1))
    assert verify(sig, gpk)
