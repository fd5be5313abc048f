"""
公式识别路由
---------------------------------
功能：
- `/hello`：探活接口，返回固定问候语。
- `/models`：返回默认模型与可选模型列表，供前端模型选择框使用。
- `/formula`：接收画布导出的 data URL 图片与模型 ID，调用多模态模型转写为 LaTeX，原样返回 `{latex}`。

错误处理：
- 图片不合法或模型不在可选列表内：返回 400 与 `ErrorResponse`；
- 识别服务抛出的异常不在此处捕获，由 `main.py` 中注册的异常处理器统一转换为结构化错误体。
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..config.settings import DEFAULT_MODEL, SUPPORTED_MODELS, OUTPUT_LANGUAGE, MAX_IMAGE_BYTES
from ..models.formula_schema import FormulaRequest, FormulaResponse, HelloResponse, ModelsResponse
from ..models.response_schema import ErrorResponse
from ..services import formula_service
from ..utils.pictures_utils import InvalidImageError, decode_data_url
from ..utils.logger import get_logger

log = get_logger("router")

router = APIRouter()


@router.get("/hello", response_model=HelloResponse)
async def hello():
    return HelloResponse(message="Hello, World!")


@router.get("/models", response_model=ModelsResponse)
async def models():
    return ModelsResponse(default=DEFAULT_MODEL, models=SUPPORTED_MODELS)


@router.post(
    "/formula",
    response_model=FormulaResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
def formula(req: FormulaRequest):
    """把手写公式图片转写为 LaTeX。

    返回字段说明：
    - `latex`: 模型原始回复；以 `ERROR:` 开头表示模型判定图片无法识别，说明文字语言由 `OUTPUT_LANGUAGE` 决定。
    """
    # 同步调用 OpenAI SDK，FastAPI 会在线程池中执行本函数
    if req.model not in SUPPORTED_MODELS:
        log.warning(f"拒绝未支持的模型: {req.model!r}")
        return JSONResponse(
            status_code=400,
            content=ErrorResponse.of("unsupported_model", f"unsupported model: {req.model}").model_dump(),
        )
    try:
        mime, content = decode_data_url(req.formula, MAX_IMAGE_BYTES)
    except InvalidImageError as e:
        log.warning(f"拒绝不合法的图片: {e}")
        return JSONResponse(status_code=400, content=ErrorResponse.of("invalid_image", e).model_dump())

    log.info(f"Formula request: model={req.model}, mime={mime}, bytes={len(content)}")
    latex = formula_service.to_latex(req.formula, model=req.model, language=OUTPUT_LANGUAGE)
    return FormulaResponse(latex=latex)
