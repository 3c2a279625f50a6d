"""
Group Initialization and Sampling
=================================

This module sets up the bilinear pairing groups the group signature scheme
runs on, and provides the canonical generators and the random sampling used
by every other module.

According to charm-crypto documentation (https://jhuisi.github.io/charm/tutorial.html):
- PairingGroup('MNT224') provides asymmetric Type-3 pairings with 224-bit base field
- Alternative curves: 'BN254', 'SS512' (symmetric, but can be used)
- G1, G2 are the source groups; GT is the target group
- Pairing operation: pair(g1_elem, g2_elem) -> GT element

Randomness
----------
charm's own ``group.random()`` cannot be seeded or replaced, so every sampler
here draws integers from an explicit ``rng`` object instead. Anything with a
``randrange(start, stop)`` method works; the default is ``secrets.SystemRandom``.
"""

import logging
import secrets

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1, G2, GT, pair

from .config import config

logger = logging.getLogger(__name__)

# Domain tags hashed onto the curve to obtain the canonical generators
_G1_TAG = b"bbs_groupsig/g1"
_G2_TAG = b"bbs_groupsig/g2"

_FALLBACK_CURVES = ('BN254', 'SS512')


def setup_group(group_name: str = None) -> dict:
    """
    Initialize the pairing group for the group signature scheme.

    Parameters
    ----------
    group_name : str, optional
        The pairing curve identifier. Defaults to ``config.curve``
        (``MNT224`` unless ``GROUPSIG_CURVE`` is set).
        If the curve cannot be loaded, 'BN254' and then 'SS512' are tried.

    Returns
    -------
    dict
        A dictionary containing:
        - 'group': The PairingGroup object
        - 'group_name': The name of the curve actually used
        - 'G1', 'G2', 'GT', 'ZR': The charm type constants
        - 'pair': The pairing function

    Examples
    --------
    >>> params = setup_group('MNT224')
    >>> group = params['group']
    >>> g1, g2 = get_generators(group)
    >>> e = pair(g1, g2)  # e is in GT
    """
    if group_name is None:
        group_name = config.curve

    candidates = [group_name] + [c for c in _FALLBACK_CURVES if c != group_name]
    last_error = None
    for name in candidates:
        try:
            group = PairingGroup(name)
        except Exception as e:
            logger.warning("Pairing curve %s not available (%s)", name, e)
            last_error = e
            continue
        if name != group_name:
            logger.warning("Falling back from %s to %s", group_name, name)
        return {
            'group': group,
            'group_name': name,
            'G1': G1,
            'G2': G2,
            'GT': GT,
            'ZR': ZR,
            'pair': pair,
        }

    raise RuntimeError(f"No pairing curve could be initialised: {last_error}")


def get_generators(group: PairingGroup) -> tuple:
    """
    Return the canonical generators (g1, g2) of G1 and G2.

    Both are fixed hash-to-curve images of constant domain tags, so every
    party and every run computes the same pair without any shared state.
    """
    g1 = group.hash(_G1_TAG, G1)
    g2 = group.hash(_G2_TAG, G2)
    return g1, g2


def default_rng():
    """Cryptographically secure randomness source used when none is given."""
    return secrets.SystemRandom()


def random_scalar(group: PairingGroup, rng) -> ZR:
    """Uniform scalar in [1, p-1] drawn from ``rng``."""
    return group.init(ZR, rng.randrange(1, group.order()))


def random_g1(group: PairingGroup, rng) -> G1:
    """Uniform non-identity element of G1, as a random power of the canonical generator."""
    g1, _ = get_generators(group)
    return g1 ** random_scalar(group, rng)
