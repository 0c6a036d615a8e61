"""
Translation between the public string ids used by the API and the
``ObjectId`` values MongoDB stores.

Every service checks the format with ``is_valid_id`` before it issues a
query, so malformed client input never reaches the driver.
"""

import re

from bson import ObjectId

from app.errors import InvalidIdentifier

_OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def is_valid_id(raw) -> bool:
    # ObjectId.is_valid also accepts 12 raw bytes, which are not public ids
    return isinstance(raw, str) and bool(_OBJECT_ID_RE.match(raw))


def to_storage_id(raw, field: str = "id") -> ObjectId:
    if not is_valid_id(raw):
        raise InvalidIdentifier(raw, field)
    return ObjectId(raw)


def to_external_id(oid: ObjectId) -> str:
    return str(oid)


def to_external(doc: dict, *refs: str) -> dict:
    """Map a stored document to its API shape.

    ``_id`` becomes ``id`` and each reference field named in ``refs``
    (e.g. ``bookId``) is converted back to its string form.
    """
    data = {k: v for k, v in doc.items() if k != "_id"}
    out = {"id": to_external_id(doc["_id"]), **data}
    for ref in refs:
        if isinstance(out.get(ref), ObjectId):
            out[ref] = to_external_id(out[ref])
    return out
