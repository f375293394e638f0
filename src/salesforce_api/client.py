from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Mapping, Optional, Union

from . import routes
from .auth import Session, authenticate
from .config import Credentials, get_version, normalize_version
from .dispatch import RequestOptions, Response, dispatch
from .exceptions import MissingCredentialsError

_logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class SalesforceClient:
    """Named Salesforce REST operations over an authenticated session.

    Each method resolves an endpoint template, makes one request and
    returns the :class:`~salesforce_api.dispatch.Response` untouched.

    The API version is read when a call is made: the client's own
    ``api_version`` if one was pinned, otherwise the process-wide value
    from :func:`salesforce_api.config.set_version`.
    """

    def __init__(
        self,
        session: Session,
        *,
        api_version: Optional[str] = None,
        http: Optional[Any] = None,
    ) -> None:
        self.session = session
        self.http = http
        self._api_version = normalize_version(api_version) if api_version else None

    @classmethod
    def login(
        cls,
        credentials: Credentials,
        *,
        api_version: Optional[str] = None,
        http: Optional[Any] = None,
    ) -> SalesforceClient:
        """Authenticate with the password grant and return a client.

        Raises :class:`MissingCredentialsError` before any request is made
        when a required credential is empty.
        """
        missing = credentials.missing()
        if missing:
            raise MissingCredentialsError(missing)
        return cls(authenticate(credentials, http=http), api_version=api_version, http=http)

    @property
    def api_version(self) -> str:
        return self._api_version or get_version()

    @api_version.setter
    def api_version(self, v: Optional[str]) -> None:
        self._api_version = normalize_version(v) if v else None

    # --------------------------- HTTP wrappers -----------------------

    def _call(self, method: str, path: str, options: Optional[RequestOptions] = None) -> Response:
        return dispatch(method, self.session, path, options, http=self.http)

    def _send_json(self, method: str, path: str, attrs: Mapping[str, Any]) -> Response:
        options = RequestOptions(body=json.dumps(attrs), headers=JSON_HEADERS)
        return self._call(method, path, options)

    # --------------------------- Org-level ---------------------------

    def versions(self) -> Response:
        """List the API versions available on the instance."""
        return self._call("GET", routes.resolve("versions"))

    def org_api_limits(self) -> Response:
        """Return API usage limits for the org."""
        return self._call("GET", routes.resolve("limits", self.api_version))

    limits = org_api_limits

    def resources(self) -> Response:
        """List the REST resources available for the current version."""
        return self._call("GET", routes.resolve("resources", self.api_version))

    # --------------------------- Object metadata ---------------------

    def list_objects(self) -> Response:
        """List the objects available to the user (global describe)."""
        return self._call("GET", routes.resolve("sobjects", self.api_version))

    def get_object_metadata(self, object_type: str) -> Response:
        """Basic metadata and recent items for ``object_type``."""
        return self._call("GET", routes.resolve("sobjects-meta", self.api_version, object_type))

    def describe_object(self, object_type: str) -> Response:
        """Full describe: every field, URL and child relationship."""
        path = routes.resolve("sobjects-describe", self.api_version, object_type)
        return self._call("GET", path)

    # --------------------------- Records -----------------------------

    def create_record(self, object_type: str, attrs: Mapping[str, Any]) -> Response:
        path = routes.resolve("sobjects-type", self.api_version, object_type)
        _logger.debug("Creating %s record", object_type)
        return self._send_json("POST", path, attrs)

    def update_record(
        self, object_type: str, record_id: str, attrs: Mapping[str, Any]
    ) -> Response:
        path = routes.resolve("sobjects-record", self.api_version, object_type, record_id)
        return self._send_json("PATCH", path, attrs)

    def delete_record(self, object_type: str, record_id: str) -> Response:
        path = routes.resolve("sobjects-record", self.api_version, object_type, record_id)
        return self._call("DELETE", path)

    def get_record_fields(
        self,
        object_type: str,
        record_id: str,
        fields: Union[str, Iterable[str]],
    ) -> Response:
        """Fetch only ``fields`` of one record."""
        path = routes.resolve(
            "sobjects-record-fields",
            self.api_version,
            object_type,
            record_id,
            routes.join_fields(fields),
        )
        return self._call("GET", path)

    def get_record_by_external_id(
        self, object_type: str, ext_id_field: str, ext_id_value: str
    ) -> Response:
        """Look a record up by an external ID field.

        One match returns the record; several return HTTP 300 with the
        URLs of every matching record.
        """
        path = routes.resolve(
            "sobjects-record-by-extid", self.api_version, object_type, ext_id_field, ext_id_value
        )
        return self._call("GET", path)

    def upsert_record_by_external_id(
        self,
        object_type: str,
        ext_id_field: str,
        ext_id_value: str,
        attrs: Mapping[str, Any],
    ) -> Response:
        """Create or update a record keyed by an external ID field.

        The server decides: 201 when a record was created, 204 when one
        was updated, 300 when the value matches more than one record.
        """
        path = routes.resolve(
            "sobjects-record-by-extid", self.api_version, object_type, ext_id_field, ext_id_value
        )
        return self._send_json("PATCH", path, attrs)

    # --------------------------- Query & search ----------------------

    def query(self, soql: str) -> Response:
        """Run a SOQL query.

        Large results come back one batch at a time with ``nextRecordsUrl``
        set; following it is left to the caller.
        """
        path = routes.resolve("query", self.api_version, routes.escape_soql(soql))
        return self._call("GET", path)

    def search(self, sosl: str) -> Response:
        """Run a SOSL search. Search terms must be enclosed in braces."""
        path = routes.resolve("search", self.api_version, routes.encode_sosl(sosl))
        return self._call("GET", path)
