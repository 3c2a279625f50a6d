"""Errors raised by the group signature operations."""


class GroupSigError(Exception):
    """Base class for all group signature errors."""


class DegenerateCredentialError(GroupSigError):
    """gamma + x was zero on every issuance attempt, so 1/(gamma + x) does not exist."""


class InvalidSignatureError(GroupSigError):
    """Raised by verify_or_raise() when the recomputed challenge does not match."""


class SerializationError(GroupSigError, ValueError):
    """Encoded structure has the wrong length or an undecodable element."""
