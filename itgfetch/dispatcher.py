"""
Request dispatcher.
Routes one fetch either straight to a URL or as a JSON PUT through the Extras proxy,
and folds every outcome into an Ok/Err result.
"""

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

import httpx
from pydantic import BaseModel, Field
from pydantic import ValidationError as ModelValidationError

from itgfetch.config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from itgfetch.errors import FetchError, SerializationError, TransportError, ValidationError

logger = logging.getLogger(__name__)

USAGE = "Usage: /theItGirlyFetch mode=(basic|extras) [url=] [path=] [body=]"

_METHOD = re.compile(r"[A-Za-z]+")

ApiUrlProvider = Callable[[], str]
ExtrasFetch = Callable[..., Awaitable[httpx.Response]]


class RequestMode(str, Enum):
    BASIC = "basic"
    EXTRAS = "extras"


class BasicRequestParams(BaseModel):
    url: str = ""
    method: str = "GET"


class ExtrasRequestParams(BaseModel):
    path: str = ""
    body: Any = Field(default_factory=dict)


@dataclass(frozen=True)
class Ok:
    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    message: str

    @property
    def ok(self) -> bool:
        return False


DispatchResult = Union[Ok, Err]


def _read_json(response: httpx.Response, label: str, allow_empty: bool = False) -> Any:
    if not response.is_success:
        reason = f" {response.reason_phrase}" if response.reason_phrase else ""
        raise TransportError(f"{label} failed: HTTP {response.status_code}{reason}")

    if not response.content and allow_empty:
        return None

    try:
        return response.json()
    except (ValueError, RecursionError) as e:
        raise SerializationError(f"{label} returned a non-JSON body") from e


def _coerce(model: type, params: Any, mode: RequestMode):
    if isinstance(params, model):
        return params
    try:
        return model.model_validate(params)
    except ModelValidationError as e:
        raise ValidationError(f"Invalid parameters for {mode.value} mode: {e.errors()[0]['msg']}") from e


class Dispatcher:
    """
    Performs a single fetch per call.

    Collaborators are passed in rather than read from globals:
        api_url: returns the current Extras base URL
        extras_fetch: sends a request through the Extras proxy, called as
            extras_fetch(url, method=..., headers=..., content=...)
        transport: optional httpx transport for basic fetches (tests use MockTransport)
    """

    def __init__(
        self,
        api_url: ApiUrlProvider,
        extras_fetch: ExtrasFetch,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self._api_url = api_url
        self._extras_fetch = extras_fetch
        self._transport = transport
        self.timeout = timeout
        self.user_agent = user_agent

    async def dispatch(self, mode: Union[RequestMode, str], params: Any) -> DispatchResult:
        try:
            mode = RequestMode(mode)
        except ValueError:
            return Err(USAGE)

        try:
            if mode is RequestMode.BASIC:
                data = await self._basic_fetch(_coerce(BasicRequestParams, params, mode))
            else:
                data = await self._extras_put(_coerce(ExtrasRequestParams, params, mode))
            return Ok(data)
        except ValidationError as e:
            return Err(f"Error: {e}")
        except FetchError as e:
            logger.error("%s error: %s", mode.value, e)
            return Err(f"Error: {e}")

    def extras_url(self, path: str) -> httpx.URL:
        """Base URL from the provider with its path replaced by `path`."""
        if not path.startswith("/"):
            path = "/" + path
        try:
            base = self._api_url()
        except Exception as e:
            # host code, may raise anything
            logger.exception("Extras URL provider failed")
            raise TransportError(f"Extras URL unavailable: {e}") from e
        try:
            return httpx.URL(base).copy_with(path=path)
        except httpx.InvalidURL as e:
            raise ValidationError(f"Invalid Extras URL: {e}") from e

    async def _basic_fetch(self, params: BasicRequestParams) -> Any:
        if not params.url:
            raise ValidationError("No 'url' provided for basic fetch")
        if not _METHOD.fullmatch(params.method):
            raise ValidationError(f"Invalid HTTP method '{params.method}'")

        try:
            url = httpx.URL(params.url)
        except httpx.InvalidURL as e:
            raise ValidationError(f"Invalid url '{params.url}': {e}") from e
        if url.scheme not in ("http", "https"):
            raise ValidationError(f"Scheme '{url.scheme}' not allowed. Use http or https.")

        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
        ) as client:
            try:
                response = await client.request(params.method.upper(), url)
            except httpx.TimeoutException as e:
                raise TransportError("Basic fetch failed: upstream timeout") from e
            except httpx.HTTPError as e:
                raise TransportError(f"Basic fetch failed: {e}") from e

        return _read_json(response, "Basic fetch")

    async def _extras_put(self, params: ExtrasRequestParams) -> Any:
        if not params.path:
            raise ValidationError("No 'path' provided for extras PUT request")

        try:
            content = json.dumps(params.body, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError, RecursionError) as e:
            raise SerializationError(f"Extras body is not JSON-serializable: {e}") from e

        url = self.extras_url(params.path)
        try:
            response = await self._extras_fetch(
                url,
                method="PUT",
                headers={"Content-Type": "application/json"},
                content=content,
            )
        except httpx.TimeoutException as e:
            raise TransportError("Extras PUT failed: upstream timeout") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Extras PUT failed: {e}") from e
        except Exception as e:
            logger.exception("Extras fetch raised")
            raise TransportError(f"Extras PUT failed: {e}") from e

        return _read_json(response, "Extras PUT", allow_empty=True)
