import logging
from typing import Optional

import requests

from models import ClientRecord, IndexEntry

from .base import ClientStore, validate_client_id, validate_name
from .errors import StorageError, ValidationError

logger = logging.getLogger(__name__)


class HttpStore(ClientStore):
    """Talks to the intake API (`/api/clients`) of another running server."""

    name = "http"

    def __init__(self, base_url="http://localhost:3001/api/clients", timeout=10.0, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, client_id=None):
        if client_id is None:
            return self.base_url
        return f"{self.base_url}/{validate_client_id(client_id)}"

    @staticmethod
    def _error_message(resp):
        try:
            return resp.json().get("error") or resp.reason
        except (ValueError, AttributeError):
            return resp.reason

    def _raise_for_write(self, resp, what):
        if resp.status_code == 400:
            raise ValidationError(self._error_message(resp))
        if not resp.ok:
            raise StorageError(f"{what} failed: HTTP {resp.status_code} {self._error_message(resp)}")

    def list_clients(self):
        try:
            resp = self.session.get(self._url(), timeout=self.timeout)
            if not resp.ok:
                logger.warning(f"http: list clients returned {resp.status_code}")
                return []
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"http: could not list clients: {e}")
            return []
        if not isinstance(data, list):
            return []
        return [IndexEntry.from_dict(e) for e in data if isinstance(e, dict)]

    def create_client(self, name: str) -> ClientRecord:
        name = validate_name(name)
        try:
            resp = self.session.post(self._url(), json={"name": name}, timeout=self.timeout)
        except requests.RequestException as e:
            raise StorageError(f"Failed to create client: {e}") from e
        self._raise_for_write(resp, "Create client")
        data = resp.json()
        return ClientRecord.from_dict(data, client_id=data.get("id"))

    def read_client(self, client_id: str) -> Optional[ClientRecord]:
        url = self._url(client_id)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            if not resp.ok:
                return None
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"http: could not read client {client_id}: {e}")
            return None
        if not isinstance(data, dict):
            return None
        return ClientRecord.from_dict(data, client_id=client_id)

    def update_client(self, client_id: str, data) -> ClientRecord:
        url = self._url(client_id)
        try:
            resp = self.session.put(url, json=data, timeout=self.timeout)
        except requests.RequestException as e:
            raise StorageError(f"Failed to save client data: {e}") from e
        self._raise_for_write(resp, "Save client data")
        return ClientRecord.from_dict(resp.json(), client_id=client_id)

    def delete_client(self, client_id: str) -> None:
        url = self._url(client_id)
        try:
            resp = self.session.delete(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise StorageError(f"Failed to delete client: {e}") from e
        self._raise_for_write(resp, "Delete client")
