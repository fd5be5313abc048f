"""
前端会话状态（UIState）
---------------------------------
- 全部为瞬时状态，只在一次会话内有效，不做持久化；
- `error_message` 为 None 表示无错误，空串表示“有错误但说明为空”（模型只回复了 `ERROR:`）；
- `display_state()` 给出当前唯一生效的展示状态：loading / error / latex / idle。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from ..config.settings import DEFAULT_MODEL

DisplayState = Literal["idle", "loading", "error", "latex"]


@dataclass
class UIState:
    latex_text: str = ""
    preview_image: Optional[str] = None
    is_loading: bool = False
    error_message: Optional[str] = None
    selected_model: str = DEFAULT_MODEL
    last_request_duration_ms: Optional[int] = None

    def display_state(self) -> DisplayState:
        if self.is_loading:
            return "loading"
        if self.error_message is not None:
            return "error"
        if self.latex_text:
            return "latex"
        return "idle"

    def reset_result(self) -> None:
        """回到“尚未提交”的初始展示状态（保留已选模型）。"""
        self.latex_text = ""
        self.preview_image = None
        self.is_loading = False
        self.error_message = None
        self.last_request_duration_ms = None
