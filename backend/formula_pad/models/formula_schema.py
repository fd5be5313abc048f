"""
公式识别相关请求/响应模型
---------------------------------
功能：
- `FormulaRequest`：前端提交的画布图片（data URL）与可选模型 ID；
- `FormulaResponse`：模型原始回复，正常为 LaTeX，无法识别时以 `ERROR:` 开头；
- `HelloResponse` / `ModelsResponse`：探活与可选模型列表。
"""

from typing import List
from pydantic import BaseModel, Field

from ..config.settings import DEFAULT_MODEL


class FormulaRequest(BaseModel):
    formula: str = Field(..., min_length=1, description="画布导出的 base64 图片 data URL")
    model: str = Field(DEFAULT_MODEL, description="多模态模型 ID")


class FormulaResponse(BaseModel):
    latex: str


class HelloResponse(BaseModel):
    message: str


class ModelsResponse(BaseModel):
    default: str
    models: List[str]
