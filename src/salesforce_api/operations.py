"""Function-style API: every call takes the session as first argument.

These read the process-wide API version at call time; use
:class:`~salesforce_api.client.SalesforceClient` to pin a version.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Union

from .auth import Session
from .client import SalesforceClient
from .dispatch import Response


def versions(session: Session) -> Response:
    return SalesforceClient(session).versions()


def org_api_limits(session: Session) -> Response:
    return SalesforceClient(session).org_api_limits()


def resources(session: Session) -> Response:
    return SalesforceClient(session).resources()


def list_objects(session: Session) -> Response:
    return SalesforceClient(session).list_objects()


def get_object_metadata(session: Session, object_type: str) -> Response:
    return SalesforceClient(session).get_object_metadata(object_type)


def describe_object(session: Session, object_type: str) -> Response:
    return SalesforceClient(session).describe_object(object_type)


def create_record(session: Session, object_type: str, attrs: Mapping[str, Any]) -> Response:
    return SalesforceClient(session).create_record(object_type, attrs)


def update_record(
    session: Session, object_type: str, record_id: str, attrs: Mapping[str, Any]
) -> Response:
    return SalesforceClient(session).update_record(object_type, record_id, attrs)


def delete_record(session: Session, object_type: str, record_id: str) -> Response:
    return SalesforceClient(session).delete_record(object_type, record_id)


def get_record_fields(
    session: Session, object_type: str, record_id: str, fields: Union[str, Iterable[str]]
) -> Response:
    return SalesforceClient(session).get_record_fields(object_type, record_id, fields)


def get_record_by_external_id(
    session: Session, object_type: str, ext_id_field: str, ext_id_value: str
) -> Response:
    client = SalesforceClient(session)
    return client.get_record_by_external_id(object_type, ext_id_field, ext_id_value)


def upsert_record_by_external_id(
    session: Session,
    object_type: str,
    ext_id_field: str,
    ext_id_value: str,
    attrs: Mapping[str, Any],
) -> Response:
    client = SalesforceClient(session)
    return client.upsert_record_by_external_id(object_type, ext_id_field, ext_id_value, attrs)


def query(session: Session, soql: str) -> Response:
    return SalesforceClient(session).query(soql)


def search(session: Session, sosl: str) -> Response:
    return SalesforceClient(session).search(sosl)
