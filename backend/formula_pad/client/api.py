"""
识别接口客户端（httpx）
---------------------------------
功能：
- 封装 `POST /api/formula` 与 `GET /api/models` 调用；
- 把网络错误、非法 URL、非 2xx 状态、JSON 格式错误统一转换为 `FormulaApiError`，调用方只需处理一种异常；
- 若服务端返回 `ErrorResponse` 结构体，则带上其中的 `error` / `message`。

使用说明：
- `FormulaApiClient(base_url)` 自建 httpx 客户端；
- 也可传入现成的 `httpx.Client`（例如 FastAPI 的 `TestClient`）直接对接应用。
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..utils.logger import get_logger

log = get_logger("client.api")

FORMULA_PATH = "/api/formula"
MODELS_PATH = "/api/models"


class FormulaApiError(Exception):
    """识别请求失败（传输、状态码或响应格式）。"""

    def __init__(self, message: str, status_code: Optional[int] = None, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error = error


class FormulaApiClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3333",
        timeout: float = 90.0,
        http: Optional[httpx.Client] = None,
    ):
        self._owns_http = http is None
        try:
            self.http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)
        except httpx.InvalidURL as e:
            raise FormulaApiError(f"invalid server URL: {base_url}") from e

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "FormulaApiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            res = self.http.request(method, path, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.error(f"{method} {path} 网络错误: {e.__class__.__name__}: {e}")
            raise FormulaApiError(f"network error: {e.__class__.__name__}") from e

        try:
            body = res.json()
        except ValueError as e:
            raise FormulaApiError(
                f"malformed response (HTTP {res.status_code})", status_code=res.status_code
            ) from e

        if res.is_error:
            error = body.get("error") if isinstance(body, dict) else None
            message = body.get("message") if isinstance(body, dict) else None
            raise FormulaApiError(
                message or f"request failed (HTTP {res.status_code})",
                status_code=res.status_code,
                error=error,
            )
        if not isinstance(body, dict):
            raise FormulaApiError("malformed response body", status_code=res.status_code)
        return body

    def post_formula(self, formula: str, model: str) -> str:
        """提交图片，返回服务端的 `latex` 字段（可能以 `ERROR:` 开头）。"""
        body = self._request("POST", FORMULA_PATH, json={"formula": formula, "model": model})
        latex = body.get("latex")
        if not isinstance(latex, str):
            raise FormulaApiError("response has no latex field")
        return latex

    def get_models(self) -> Dict[str, Any]:
        return self._request("GET", MODELS_PATH)
