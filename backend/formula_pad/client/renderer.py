"""
结果展示（纯函数）
---------------------------------
- `render(state)` 把 `UIState` 映射为 `ResultView`：原始 LaTeX 总是展示；loading、错误、公式三者互斥；
- `render_text(view)` 输出命令行下的纯文本展示。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .state import UIState


@dataclass(frozen=True)
class ResultView:
    raw_latex: str
    show_loader: bool
    math_field: Optional[str]
    error: Optional[str]
    duration_label: Optional[str]


def render(state: UIState) -> ResultView:
    mode = state.display_state()
    duration = state.last_request_duration_ms
    return ResultView(
        raw_latex=state.latex_text,
        show_loader=mode == "loading",
        math_field=state.latex_text if mode == "latex" else None,
        error=state.error_message if mode == "error" else None,
        duration_label=f"{duration} ms" if duration is not None else None,
    )


def render_text(view: ResultView) -> str:
    lines = []
    if view.show_loader:
        lines.append("Loading...")
    elif view.error is not None:
        lines.append(f"Error: {view.error}")
    elif view.math_field is not None:
        lines.append(view.math_field)
    if view.duration_label:
        lines.append(f"({view.duration_label})")
    return "\n".join(lines)
