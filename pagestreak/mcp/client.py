from httpx import AsyncClient, Response


def is_error(result: dict | list) -> bool:
    return isinstance(result, dict) and result.get("error") is True


class PagestreakClient:
    """Calls the Pagestreak API in-process and hands back plain JSON.

    Client errors come back as ``{"error": True, "status": ..., "detail": ...}``
    so a tool can pass them straight to the agent. Server errors raise.
    """

    def __init__(self, http: AsyncClient) -> None:
        self.http = http

    async def request(self, method: str, path: str, **kwargs) -> dict | list:
        resp = await self.http.request(method, path, **kwargs)
        return self._to_result(resp)

    async def get(self, path: str, **kwargs) -> dict | list:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> dict | list:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> dict | list:
        return await self.request("PUT", path, **kwargs)

    def _to_result(self, resp: Response) -> dict | list:
        if resp.status_code == 204:
            return {"ok": True}
        if resp.status_code >= 500:
            raise RuntimeError(f"Pagestreak API failed with {resp.status_code}: {resp.text}")
        if resp.status_code >= 400:
            return {"error": True, "status": resp.status_code, "detail": _detail(resp)}
        return resp.json()


def _detail(resp: Response) -> str:
    detail = resp.json().get("detail", resp.text)
    if isinstance(detail, list):
        # pydantic validation errors
        return "; ".join(f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg')}" for err in detail)
    return str(detail)
