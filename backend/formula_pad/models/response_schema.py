"""
统一错误返回模型（ErrorResponse）
---------------------------------
功能：
- 定义后端自身产生的非 200 响应结构：`error`（机器可读的错误码）与 `message`（可读说明）。
- 提供 `of` 工厂方法，便于异常处理器从异常直接构建返回体。

说明：
- 正常响应沿用各接口自己的模型（如 `{"latex": ...}`），不做统一包装；
- 模型判定“无法识别”属于业务结果（`ERROR:` 前缀），走 200，不使用本结构。
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    message: str

    @classmethod
    def of(cls, error: str, exc: Exception | str) -> "ErrorResponse":
        return cls(error=error, message=str(exc))
