"""
Provider identifier extraction

LightBox returns collections (``parcels``, ``assessments``) whose first
record is the match. The record either carries its ``id`` directly or only
a ``$ref`` link ending in the id.
"""

from typing import Any


def extract_id(payload: Any, collection: str) -> str | None:
    """
    Pull the identifier of the first record in ``payload[collection]``

    Tries the record's ``id`` field, then the last path segment of its
    ``$ref`` link.

    Args:
        payload: Decoded upstream body (any shape)
        collection: Key of the record list, e.g. "parcels"

    Returns:
        The identifier as a string, or None when neither shape yields one
    """
    if not isinstance(payload, dict):
        return None

    records = payload.get(collection)
    if not isinstance(records, list) or not records:
        return None

    record = records[0]
    if not isinstance(record, dict):
        return None

    record_id = record.get("id")
    if record_id is not None and str(record_id).strip():
        return str(record_id).strip()

    ref = record.get("$ref")
    if isinstance(ref, str):
        segment = ref.rstrip("/").rsplit("/", 1)[-1].strip()
        if segment:
            return segment

    return None


def extract_parcel_id(payload: Any) -> str | None:
    return extract_id(payload, "parcels")


def extract_assessment_id(payload: Any) -> str | None:
    return extract_id(payload, "assessments")
