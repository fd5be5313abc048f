"""
后端入口（FastAPI 应用）
---------------------------------
功能：
- 创建 FastAPI 应用并配置 CORS，允许前端开发环境跨域访问。
- 挂载公式识别路由，路径前缀为 `/api`（`/api/hello`、`/api/models`、`/api/formula`）。
- 注册异常处理器：请求体校验失败、识别服务的各类异常与未处理异常统一转换为 `ErrorResponse` 结构化错误体。
- 在根路径 `/` 挂载静态前端页面（画布、预览、结果），与接口同源，无需额外部署。

启动：
- `python -m formula_pad serve`，或 `uvicorn formula_pad.main:app --host 0.0.0.0 --port 3333`。
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .routers.formula_router import router as formula_router
from .services.formula_service import (
    FormulaServiceError,
    GatewayConfigError,
)
from .models.response_schema import ErrorResponse
from .config.settings import FRONTEND_ORIGINS, STATIC_DIR
from .utils.logger import log


app = FastAPI(title="Formula Pad API", version="0.3.0")


@app.middleware("http")
async def _unhandled_error(request: Request, call_next):
    """兜底未处理异常，返回 500 结构化错误体。

    需先于 CORS 注册，使其位于 CORS 内层，500 响应同样带上跨域头；异常在此终止，不再交给 uvicorn 重复记录。
    """
    try:
        return await call_next(request)
    except Exception as exc:
        log.exception(f"{request.url.path} 未处理异常: {exc.__class__.__name__}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse.of("internal_error", f"internal error: {exc.__class__.__name__}").model_dump(),
        )


# 允许前端开发端口跨域访问（默认 vite 5173）
app.add_middleware(
    CORSMiddleware,
    allow_origins=FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def _request_validation_error(request: Request, exc: RequestValidationError):
    """请求体校验失败（缺少 `formula`、`model` 为 null 等）：422 + `invalid_request`。"""
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', 'invalid')}" for err in exc.errors()
    )
    log.warning(f"{request.url.path} 请求体不合法: {details}")
    return JSONResponse(status_code=422, content=ErrorResponse.of("invalid_request", details).model_dump())


@app.exception_handler(FormulaServiceError)
async def _formula_service_error(request: Request, exc: FormulaServiceError):
    """识别服务异常：未配置密钥返回 503，其余（服务商失败、空回复）返回 502。"""
    status_code = 503 if isinstance(exc, GatewayConfigError) else 502
    log.error(f"{request.url.path} 失败: {exc.code}: {exc}")
    return JSONResponse(status_code=status_code, content=ErrorResponse.of(exc.code, exc).model_dump())


# 路由挂载
app.include_router(formula_router, prefix="/api", tags=["formula"])

# 静态前端需在路由之后挂载，避免 `/` 覆盖 `/api/*`
app.mount("/", StaticFiles(directory=str(STATIC_DIR), html=True), name="static")
