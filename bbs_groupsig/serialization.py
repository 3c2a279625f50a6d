"""
Serialization of keys, credentials and signatures.

Two encodings are provided for every structure:

- bytes: the canonical encodings of the fields concatenated in declared
  field order (structure.FIELDS). Every field type has a fixed width on a
  given curve, so the layout needs no separators or length prefixes.
- dict: a JSON-safe mapping of field name to base64 string, for transport.
"""

import base64
from typing import Union

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1, G2

from .exceptions import SerializationError
from .groups import get_generators
from .structures import GroupPublicKey, GroupSecretKey, MemberCredential, Signature
from .utils import serialize_element, deserialize_element

Structure = Union[GroupPublicKey, GroupSecretKey, MemberCredential, Signature]

_KIND_NAMES = {ZR: "ZR", G1: "G1", G2: "G2"}


def _sample(group: PairingGroup, kind):
    if kind == ZR:
        return group.init(ZR, 1)
    if kind == G1:
        return get_generators(group)[0]
    if kind == G2:
        return get_generators(group)[1]
    raise ValueError(f"Unsupported element type: {kind}")


def element_width(group: PairingGroup, kind) -> int:
    """Encoded length in bytes of a ZR, G1 or G2 element on this curve."""
    return len(serialize_element(_sample(group, kind), group))


def _type_tag(group: PairingGroup, kind) -> bytes:
    """The ``<type>:`` prefix charm writes in front of every element of ``kind``."""
    tag, sep, _ = serialize_element(_sample(group, kind), group).partition(b":")
    return tag + sep if sep else b""


def _decode(data: bytes, group: PairingGroup, name: str, kind):
    """
    Decode one field and check it is the canonical encoding of a ``kind`` element.

    Only canonical encodings are accepted: the decoded element must
    re-serialize to exactly ``data``, so no two distinct inputs decode to
    the same element.
    """
    tag = _type_tag(group, kind)
    if not data.startswith(tag):
        raise SerializationError(f"Field {name!r} is not a {_KIND_NAMES[kind]} element")
    try:
        base64.b64decode(data[len(tag):], validate=True)
    except ValueError as e:
        raise SerializationError(f"Field {name!r} is not valid base64") from e

    try:
        elem = deserialize_element(data, group)
    except Exception as e:
        raise SerializationError(f"Field {name!r} could not be decoded: {e}") from e
    if elem is None or elem is False:
        raise SerializationError(f"Field {name!r} could not be decoded")

    if kind != ZR and not group.ismember(elem):
        raise SerializationError(f"Field {name!r} is not in the {_KIND_NAMES[kind]} subgroup")
    if serialize_element(elem, group) != data:
        raise SerializationError(f"Field {name!r} is not canonically encoded")
    return elem


# ---------------------------------------------------------------------------
# bytes
# ---------------------------------------------------------------------------

def to_bytes(obj: Structure) -> bytes:
    """Concatenate the field encodings of ``obj`` in declared order."""
    return b"".join(serialize_element(getattr(obj, name), obj.group) for name in obj.FIELDS)


def _from_bytes(cls, data: bytes, group: PairingGroup):
    widths = [element_width(group, kind) for kind in cls.KINDS]
    expected = sum(widths)
    if len(data) != expected:
        raise SerializationError(
            f"{cls.__name__} encoding must be {expected} bytes, got {len(data)}"
        )

    values = {}
    offset = 0
    for name, kind, width in zip(cls.FIELDS, cls.KINDS, widths):
        values[name] = _decode(data[offset:offset + width], group, name, kind)
        offset += width

    return cls(group=group, **values)


def signature_from_bytes(data: bytes, group: PairingGroup) -> Signature:
    return _from_bytes(Signature, data, group)


def public_key_from_bytes(data: bytes, group: PairingGroup) -> GroupPublicKey:
    return _from_bytes(GroupPublicKey, data, group)


def secret_key_from_bytes(data: bytes, group: PairingGroup) -> GroupSecretKey:
    return _from_bytes(GroupSecretKey, data, group)


def credential_from_bytes(data: bytes, group: PairingGroup) -> MemberCredential:
    return _from_bytes(MemberCredential, data, group)


# ---------------------------------------------------------------------------
# JSON-safe dicts
# ---------------------------------------------------------------------------

def to_dict(obj: Structure) -> dict:
    """Map each field name to the base64 of its canonical encoding."""
    return {
        name: base64.b64encode(serialize_element(getattr(obj, name), obj.group)).decode('utf-8')
        for name in obj.FIELDS
    }


def _from_dict(cls, data: dict, group: PairingGroup):
    missing = [name for name in cls.FIELDS if name not in data]
    if missing:
        raise SerializationError(f"{cls.__name__} is missing fields: {', '.join(missing)}")

    values = {}
    for name, kind in zip(cls.FIELDS, cls.KINDS):
        try:
            raw = base64.b64decode(data[name], validate=True)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Field {name!r} is not valid base64") from e
        values[name] = _decode(raw, group, name, kind)

    return cls(group=group, **values)


def signature_from_dict(data: dict, group: PairingGroup) -> Signature:
    return _from_dict(Signature, data, group)


def public_key_from_dict(data: dict, group: PairingGroup) -> GroupPublicKey:
    return _from_dict(GroupPublicKey, data, group)


def secret_key_from_dict(data: dict, group: PairingGroup) -> GroupSecretKey:
    return _from_dict(GroupSecretKey, data, group)


def credential_from_dict(data: dict, group: PairingGroup) -> MemberCredential:
    return _from_dict(MemberCredential, data, group)
