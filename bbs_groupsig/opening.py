"""
Signature opening (tracing).

With ξ1, ξ2 the group manager strips the blinding from T3:

    T1^{ξ2} · T2^{ξ1} = u^{a·ξ2} · v^{b·ξ1} = h^{a} · h^{b}
    A = T3 / (T1^{ξ2} · T2^{ξ1})

Only open signatures that already verified under the matching public key;
under any other key the result is an unrelated G1 element, not an error.
"""

import logging
from typing import Any, Mapping, Optional

from charm.toolbox.pairinggroup import G1

from .structures import GroupSecretKey, MemberCredential, Signature
from .utils import div, serialize_element

logger = logging.getLogger(__name__)


def open_signature(sig: Signature, gsk: GroupSecretKey) -> G1:
    """Recover the A component of the credential that produced ``sig``."""
    return div(sig.t3, (sig.t1 ** gsk.xi2) * (sig.t2 ** gsk.xi1))


def is_signed_member(cred: MemberCredential, sig: Signature, gsk: GroupSecretKey) -> bool:
    """True if ``sig`` opens to the A of ``cred``."""
    return open_signature(sig, gsk) == cred.A


def trace(sig: Signature, gsk: GroupSecretKey, registry: Mapping[bytes, Any]) -> Optional[Any]:
    """
    Map a signature to a member identity.

    ``registry`` is the issuer's record of ``serialize_element(A) -> member id``
    built at issuance time. Returns None when the opened A was never issued.
    """
    A = open_signature(sig, gsk)
    member = registry.get(serialize_element(A, gsk.group))
    if member is None:
        logger.info("Opened signature does not match any registered credential")
    return member
