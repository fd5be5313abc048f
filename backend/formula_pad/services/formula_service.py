# -*- coding: utf-8 -*-
"""
手写公式识别服务（OpenAI 多模态）
---------------------------------
功能：
- 调用 OpenAI 多模态对话接口，把前端画布导出的 data URL 图片转写为 LaTeX；
- 单轮请求：系统提示（转写规则 + `ERROR:` 约定）+ 用户消息（内联图片）；
- 原样返回首个 choice 的文本，`ERROR:` 前缀由前端解析，服务端不做处理。

错误约定：
- 未配置 `OPENAI_API_KEY`：抛出 `GatewayConfigError`；
- SDK 调用失败（网络、鉴权、限流等）：抛出 `ModelProviderError`；
- 模型返回空内容：抛出 `EmptyModelResponseError`，不以空串掩盖服务商故障。

不做重试、不做限流处理：每次调用只尽力请求一次。
"""
from __future__ import annotations

import time

from openai import OpenAI, OpenAIError

from ..config.settings import OPENAI_BASE_URL, OPENAI_API_KEY, OPENAI_TIMEOUT
from ..utils.prompt_utils import latex_transcription_system_prompt
from ..utils.logger import get_logger

log = get_logger("gateway")


class FormulaServiceError(Exception):
    """识别服务错误基类；`code` 作为结构化错误体中的 `error` 字段。"""

    code = "formula_service_error"


class GatewayConfigError(FormulaServiceError):
    code = "gateway_not_configured"


class ModelProviderError(FormulaServiceError):
    code = "model_provider_error"


class EmptyModelResponseError(FormulaServiceError):
    code = "empty_model_response"


def _get_client() -> OpenAI:
    """创建 OpenAI 客户端。

    - `base_url` 为空时使用官方端点；
    - 密钥为空时抛出 `GatewayConfigError`。
    """
    if not OPENAI_API_KEY:
        raise GatewayConfigError("OPENAI_API_KEY 未设置，请在环境变量或 .env 中提供")
    return OpenAI(base_url=OPENAI_BASE_URL, api_key=OPENAI_API_KEY, timeout=OPENAI_TIMEOUT)


def build_messages(image: str, language: str) -> list[dict]:
    """构造单轮多模态消息：系统提示 + 内联图片。"""
    return [
        {"role": "system", "content": latex_transcription_system_prompt(language)},
        {
            "role": "user",
            "content": [
                {"type": "image_url", "image_url": {"url": image}},
            ],
        },
    ]


def to_latex(image: str, *, model: str, language: str) -> str:
    """把手写公式图片转写为 LaTeX 字符串。

    - image: 图片 data URL（`data:image/png;base64,...`）；
    - model: 模型 ID，如 `gpt-4o`；
    - language: `ERROR:` 说明所用语言。

    返回模型原始回复（可能以 `ERROR:` 开头）。
    """
    client = _get_client()

    t0 = time.perf_counter()
    try:
        resp = client.chat.completions.create(
            model=model,
            messages=build_messages(image, language),
        )
    except OpenAIError as e:
        log.error(f"OpenAI 调用失败: model={model}, {e.__class__.__name__}: {e}")
        raise ModelProviderError(f"model provider request failed: {e.__class__.__name__}") from e
    ms = int((time.perf_counter() - t0) * 1000)

    message = resp.choices[0].message.content if resp.choices else None
    if not message:
        log.error(f"模型返回空内容: model={model}, ai_ms={ms}")
        raise EmptyModelResponseError("Failed to convert image to LaTeX")

    log.info(f"识别完成: model={model}, ai_ms={ms}, chars={len(message)}")
    return message
