"""HTTP transport returning tagged results instead of raising.

``send`` reports every outcome as one of ``Ok``, ``HttpFailure`` or
``TransportFailure``; ``call`` unwraps it through the error mapper.
"""

from typing import Any, Literal, Union

import requests
from pydantic import BaseModel, ConfigDict

from pispi_sdk.config import ClientConfig
from pispi_sdk.errors import raise_for_result


class Ok(BaseModel):
    kind: Literal["ok"] = "ok"
    value: Any = None


class HttpFailure(BaseModel):
    kind: Literal["httpError"] = "httpError"
    status: int
    status_text: str = ""
    body: Any = None
    url: str = ""


class TransportFailure(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Literal["transportError"] = "transportError"
    cause: Exception


HttpResult = Union[Ok, HttpFailure, TransportFailure]


class Transport:
    """A requests session bound to one PI-SPI environment."""

    def __init__(self, config: ClientConfig, session: requests.Session | None = None):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update(config.headers)
        if config.access_token:
            self.session.headers["Authorization"] = f"Bearer {config.access_token}"
        if config.client_cert and config.client_key:
            self.session.cert = (str(config.client_cert), str(config.client_key))
        elif config.client_cert:
            self.session.cert = str(config.client_cert)
        if config.ca_cert:
            self.session.verify = str(config.ca_cert)

    def send(self, method: str, path: str, params: dict | None = None, json: Any = None) -> HttpResult:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method.upper(),
                url,
                params=params,
                json=json,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            return TransportFailure(cause=e)

        body = _decode_body(response)
        if not response.ok:
            return HttpFailure(
                status=response.status_code,
                status_text=response.reason or "",
                body=body,
                url=url,
            )
        return Ok(value=body)

    def call(self, method: str, path: str, params: dict | None = None, json: Any = None) -> Any:
        """Send a request and return its decoded body, raising PiSpiError on failure."""
        return raise_for_result(self.send(method, path, params=params, json=json))

    def get(self, path, **kwargs):
        return self.call("GET", path, **kwargs)

    def post(self, path, **kwargs):
        return self.call("POST", path, **kwargs)

    def put(self, path, **kwargs):
        return self.call("PUT", path, **kwargs)

    def delete(self, path, **kwargs):
        return self.call("DELETE", path, **kwargs)

    def patch(self, path, **kwargs):
        return self.call("PATCH", path, **kwargs)


def _decode_body(response: requests.Response) -> Any:
    if not response.content:
        return None
    if "json" in response.headers.get("Content-Type", ""):
        try:
            return response.json()
        except ValueError:
            pass
    return response.text
