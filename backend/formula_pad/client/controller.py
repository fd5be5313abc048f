"""
提交控制器（send / resend 流程）
---------------------------------
功能：
- `send()`：导出画布为预览图、清空画布、进入 loading，提交图片与已选模型，按 `ERROR:` 约定写入错误或 LaTeX；
- `resend()`：复用上一次的预览图重新提交，没有预览图时为空操作；
- `clear()` / `undo()`：编辑画布，`clear()` 同时把结果区恢复到“尚未提交”状态；
- 在调用处用 `perf_counter` 为每次请求计时，只在得到正值时更新展示的耗时。

保证：
- 每次请求开始前清空上一次的 LaTeX 与错误；
- 无论请求成功、模型报错还是传输失败，结束后 `is_loading` 一定为 False；
- 传输失败时展示服务端的 `message`（若有），否则展示通用失败文案。
"""

from __future__ import annotations

from time import perf_counter
from typing import Optional, Sequence

from .api import FormulaApiClient, FormulaApiError
from .drawing_surface import DrawingSurface
from .state import UIState
from ..config.settings import SUPPORTED_MODELS
from ..utils.prompt_utils import split_error
from ..utils.logger import get_logger

log = get_logger("client.controller")

GENERIC_FAILURE_MESSAGE = "Request failed. Please try again."


class SubmissionController:
    def __init__(
        self,
        api: FormulaApiClient,
        surface: Optional[DrawingSurface] = None,
        state: Optional[UIState] = None,
        models: Sequence[str] = SUPPORTED_MODELS,
    ):
        self.api = api
        self.surface = surface
        self.state = state if state is not None else UIState()
        self.models = list(models)

    def close(self) -> None:
        """释放画布句柄；之后的画布操作均为空操作。"""
        self.surface = None

    # --- 画布操作 ---

    def undo(self) -> None:
        if self.surface is None:
            return
        self.surface.undo()

    def clear(self) -> None:
        if self.surface is not None:
            self.surface.clear()
        self.state.reset_result()

    def select_model(self, model: str) -> None:
        if model not in self.models:
            raise ValueError(f"unsupported model: {model}")
        self.state.selected_model = model

    # --- 提交 ---

    def send(self) -> None:
        if self.surface is None:
            return
        image = self.surface.export_image()
        self.state.preview_image = image
        self.surface.clear()
        self._submit(image)

    def resend(self) -> None:
        if not self.state.preview_image:
            return
        self._submit(self.state.preview_image)

    def _submit(self, image: str) -> None:
        state = self.state
        state.is_loading = True
        state.latex_text = ""
        state.error_message = None

        t0 = perf_counter()
        try:
            reply = self.api.post_formula(image, state.selected_model)
        except FormulaApiError as e:
            log.warning(f"识别请求失败: status={e.status_code}, error={e.error}, {e.message}")
            state.error_message = e.message if e.status_code is not None else GENERIC_FAILURE_MESSAGE
            return
        finally:
            ms = int((perf_counter() - t0) * 1000)
            if ms > 0:
                state.last_request_duration_ms = ms
            state.is_loading = False

        latex, error = split_error(reply)
        state.latex_text = latex
        state.error_message = error
