"""
Key Generation and Issuance
===========================

Parameter generation (the group manager's key pair) and member credential
issuance.

Setup:
------
    ξ1, ξ2, γ ←$ Z_p,   tmp ←$ G1
    u = tmp^{ξ1},  v = tmp^{ξ2},  h = u^{ξ2},  w = g2^{γ}

    gpk = (h, u, v, w, g1, g2),   gsk = (ξ1, ξ2, γ)

Since h = tmp^{ξ1·ξ2} we also have h = v^{ξ1}; opening relies on this.

Issue:
------
    x ←$ Z_p,   A = g1^{1/(γ+x)}

A credential satisfies e(A, w · g2^x) = e(g1, g2).
"""

import logging

from charm.toolbox.pairinggroup import pair

from .config import config
from .exceptions import DegenerateCredentialError
from .groups import setup_group, get_generators, default_rng, random_scalar, random_g1
from .structures import GroupPublicKey, GroupSecretKey, MemberCredential, SetupResult
from .utils import is_zero

logger = logging.getLogger(__name__)


def setup(params: dict = None, rng=None) -> SetupResult:
    """
    Generate the group public key and the group secret key.

    Parameters
    ----------
    params : dict, optional
        Output of setup_group(). If None, the configured curve is initialised.
    rng : optional
        Randomness source with a randrange() method. Defaults to
        secrets.SystemRandom().

    Returns
    -------
    SetupResult
        (gpk, gsk)
    """
    if params is None:
        params = setup_group()
    if rng is None:
        rng = default_rng()

    group = params['group']
    g1, g2 = get_generators(group)

    xi1 = random_scalar(group, rng)
    xi2 = random_scalar(group, rng)

    tmp = random_g1(group, rng)

    u = tmp ** xi1
    v = tmp ** xi2

    h = u ** xi2

    gamma = random_scalar(group, rng)
    w = g2 ** gamma

    gpk = GroupPublicKey(h=h, u=u, v=v, w=w, g1=g1, g2=g2, group=group)
    gsk = GroupSecretKey(xi1=xi1, xi2=xi2, gamma=gamma, group=group)

    logger.debug("Generated group key pair on %s", params.get('group_name', 'unknown curve'))
    return SetupResult(gpk=gpk, gsk=gsk)


def issue(gsk: GroupSecretKey, gpk: GroupPublicKey, rng=None, max_attempts: int = None) -> MemberCredential:
    """
    Issue a member credential (x, A) with A = g1^{1/(γ+x)}.

    Parameters
    ----------
    gsk : GroupSecretKey
        The group secret key (γ is used)
    gpk : GroupPublicKey
        The group public key (g1 is used)
    rng : optional
        Randomness source with a randrange() method
    max_attempts : int, optional
        How many x values to try when γ + x = 0. Defaults to
        config.issue_max_attempts.

    Returns
    -------
    MemberCredential
        A fresh credential with an independent x

    Raises
    ------
    DegenerateCredentialError
        If every sampled x satisfied γ + x = 0.
    """
    if rng is None:
        rng = default_rng()
    if max_attempts is None:
        max_attempts = config.issue_max_attempts
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    group = gpk.group
    for attempt in range(1, max_attempts + 1):
        x = random_scalar(group, rng)
        exponent = gsk.gamma + x
        if is_zero(exponent, group):
            logger.warning("Degenerate issuance (gamma + x = 0) on attempt %d/%d, resampling x",
                           attempt, max_attempts)
            continue

        A = gpk.g1 ** (exponent ** -1)
        logger.debug("Issued member credential on attempt %d", attempt)
        return MemberCredential(x=x, A=A, group=group)

    raise DegenerateCredentialError(
        f"gamma + x was zero on all {max_attempts} issuance attempts"
    )


def check_credential(cred: MemberCredential, gpk: GroupPublicKey) -> bool:
    """
    Check the issuer's relation e(A, w · g2^x) = e(g1, g2).

    A member can run this on a freshly received credential; it needs only
    public data.
    """
    lhs = pair(cred.A, gpk.w * (gpk.g2 ** cred.x))
    rhs = pair(gpk.g1, gpk.g2)
    return lhs == rhs
