"""Thin async client for the SerpApi JSON endpoint."""

import httpx

from ..errors import ProviderError

SERPAPI_URL = "https://serpapi.com/search.json"


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return resp.reason_phrase


async def serpapi_search(
    http: httpx.AsyncClient,
    api_key: str,
    params: dict,
    capability: str = "SerpApi",
) -> dict:
    """GET ``search.json`` with the Google engine and return the parsed body.

    Raises ``ProviderError`` on transport errors, non-2xx statuses and
    non-JSON bodies.
    """
    query = {"engine": "google", **params, "api_key": api_key}
    try:
        resp = await http.get(SERPAPI_URL, params=query)
    except httpx.HTTPError as exc:
        raise ProviderError(capability, f"request failed: {exc!r}") from exc

    if resp.is_error:
        raise ProviderError(capability, f"HTTP {resp.status_code}: {_error_detail(resp)}")

    try:
        data = resp.json()
    except ValueError as exc:
        raise ProviderError(capability, "response is not JSON") from exc
    if not isinstance(data, dict):
        raise ProviderError(capability, f"unexpected response type {type(data).__name__}")
    return data
