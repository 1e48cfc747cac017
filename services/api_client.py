# -*- coding: utf-8 -*-
"""
Preference Store API Client
===========================

Thin requests-based client for the tenant preference endpoints:

    GET  /preferences   → stored draft, or 404 when none exists yet
    POST /preferences   → create/replace the draft (full snapshot)
    PUT  /preferences   → update the draft (changed keys only)

Authentication is established elsewhere; the client is handed a bearer
token via set_access_token().
"""

import json as _json
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
import urllib3

from services.exceptions import ApiException, NetworkException, NotFoundError, UnauthorizedError
from utils.logger import get_logger

logger = get_logger(__name__)

_MAX_LOGGED_BODY = 1000


@dataclass
class ApiConfig:
    """
    API connection settings.

    ✅ DYNAMIC: Reads from .env file via Config when not provided

    Example .env:
        API_BASE_URL=http://localhost:3001/api
        API_TIMEOUT=15
    """
    base_url: str = None  # Will be loaded from Config
    timeout: int = None  # Will be loaded from Config
    verify_ssl: bool = None  # Will be loaded from Config
    preferences_endpoint: str = None  # Will be loaded from Config

    def __post_init__(self):
        """Load from Config if not provided."""
        from app.config import Config

        if self.base_url is None:
            self.base_url = Config.API_BASE_URL
        if self.timeout is None:
            self.timeout = Config.API_TIMEOUT
        if self.verify_ssl is None:
            self.verify_ssl = Config.API_VERIFY_SSL
        if self.preferences_endpoint is None:
            self.preferences_endpoint = Config.PREFERENCES_ENDPOINT


class PreferencesApiClient:
    """
    Client for the preference store.

    Features:
    - Bearer token supplied by the authenticated session
    - Bounded request timeout
    - Typed errors (ApiException / UnauthorizedError / NotFoundError / NetworkException)

    Usage:
        client = PreferencesApiClient(ApiConfig(base_url="http://localhost:3001/api"))
        client.set_access_token(token)
        draft = client.get_preferences()
    """

    def __init__(self, config: Optional[ApiConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or ApiConfig()
        self.base_url = self.config.base_url.rstrip('/')
        self.access_token: Optional[str] = None
        self.http = session or requests.Session()
        # Session is shared by persistence worker threads; one request at a time
        self._http_lock = threading.Lock()

        if not self.config.verify_ssl:
            # Self-signed certificates in development
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    # ==================== Authentication ====================

    def set_access_token(self, token: str):
        """Set access token from the authenticated user session."""
        self.access_token = token
        logger.debug("Access token updated externally")

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json"
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    # ==================== Transport ====================

    def _request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict] = None,
        params: Optional[Dict] = None
    ) -> Any:
        """
        Execute an HTTP request with error handling.

        Args:
            method: HTTP method (GET, POST, PUT)
            endpoint: API endpoint (e.g., "/preferences")
            json_data: JSON payload
            params: Query parameters

        Returns:
            Response JSON data (None for an empty body)
        """
        url = f"{self.base_url}{endpoint}"

        logger.info(f"[API REQ] {method} {endpoint}")
        if params:
            logger.info(f"[API REQ] Params: {params}")
        if json_data is not None:
            logger.debug(f"[API REQ] Body: {_dump(json_data)}")

        try:
            with self._http_lock:
                response = self.http.request(
                    method=method,
                    url=url,
                    json=json_data,
                    params=params,
                    headers=self._headers(),
                    timeout=self.config.timeout,
                    verify=self.config.verify_ssl
                )
            response.raise_for_status()

            result = response.json() if response.text else None

            logger.info(f"[API RES] {response.status_code} {endpoint}")
            if result:
                logger.debug(f"[API RES] Body: {_dump(result)}")
            return result

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            response_data = {}
            try:
                response_data = e.response.json() if e.response is not None else {}
            except ValueError:
                pass
            if not isinstance(response_data, dict):
                response_data = {"message": str(response_data)}

            logger.error(f"[API ERR] {status_code} {method} {endpoint} | Response: {response_data}")
            message = response_data.get("message") or str(e)
            if isinstance(message, list):
                message = "; ".join(str(m) for m in message)

            if status_code in (401, 403):
                raise UnauthorizedError(message, status_code=status_code,
                                        response_data=response_data, context=endpoint)
            if status_code == 404:
                raise NotFoundError(message, status_code=status_code,
                                    response_data=response_data, context=endpoint)
            raise ApiException(
                message=message,
                status_code=status_code,
                response_data=response_data,
                context=endpoint
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error(f"Network error: {endpoint} - {e}")
            raise NetworkException(message=str(e), original_error=e, context=endpoint)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {endpoint} - {e}")
            raise NetworkException(message=str(e), original_error=e, context=endpoint)

    # ==================== Preferences ====================

    def get_preferences(self) -> Dict[str, Any]:
        """
        Fetch the stored preference draft.

        Raises:
            NotFoundError: no draft stored yet
            UnauthorizedError: token missing or rejected
        """
        data = self._request("GET", self.config.preferences_endpoint)
        if not data:
            raise NotFoundError("No stored preferences", status_code=404,
                                context=self.config.preferences_endpoint)
        # Some deployments wrap the entity in {"data": {...}}
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            data = data["data"]
        return data

    def create_preferences(self, payload: Dict[str, Any], complete: bool = False) -> Dict[str, Any]:
        """Create or replace the draft with a full snapshot (POST)."""
        return self._send("POST", payload, complete)

    def update_preferences(self, payload: Dict[str, Any], complete: bool = False) -> Dict[str, Any]:
        """Update the stored draft with changed keys only (PUT)."""
        return self._send("PUT", payload, complete)

    def _send(self, method: str, payload: Dict[str, Any], complete: bool) -> Dict[str, Any]:
        params = {"complete": "true"} if complete else None
        data = self._request(method, self.config.preferences_endpoint, json_data=payload, params=params)
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            data = data["data"]
        return data or {}


def _dump(data: Any) -> str:
    try:
        text = _json.dumps(data, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        text = repr(data)
    if len(text) > _MAX_LOGGED_BODY:
        return f"{text[:_MAX_LOGGED_BODY]}... (truncated)"
    return text
