"""
画布（手写笔画记录与导出）
---------------------------------
功能：
- 以“笔画组”为单位记录指针事件：按下开始一笔、移动追加点、抬起结束；
- `undo()` 弹出最近一笔并保留其余笔画，`clear()` 清空全部；
- `to_data()` / `from_data()` 以纯列表形式导出/恢复笔画，可直接 JSON 序列化；
- `export_image()` 用 Pillow 在白底上重绘全部笔画，返回 PNG data URL，供识别接口使用。

说明：
- 不处理压感、贝塞尔平滑等绘制细节，笔画按折线绘制，端点补圆点；
- 所有操作在空画布上都是无副作用的空操作，不抛异常。
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from PIL import Image, ImageDraw

from ..utils.pictures_utils import bytes_to_data_url

Point = Tuple[float, float]


@dataclass
class Stroke:
    points: List[Point] = field(default_factory=list)
    color: str = "black"
    width: float = 2.5

    def to_dict(self) -> Dict[str, Any]:
        return {
            "points": [{"x": x, "y": y} for (x, y) in self.points],
            "color": self.color,
            "width": self.width,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stroke":
        pts = [(float(p["x"]), float(p["y"])) for p in data.get("points", [])]
        return cls(points=pts, color=data.get("color", "black"), width=float(data.get("width", 2.5)))


class DrawingSurface:
    """内存中的手写画布。"""

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        background_color: str = "white",
        pen_color: str = "black",
        pen_width: float = 2.5,
    ):
        self.width = width
        self.height = height
        self.background_color = background_color
        self.pen_color = pen_color
        self.pen_width = pen_width
        self.strokes: List[Stroke] = []
        self._current: Optional[Stroke] = None

    # --- 指针事件 ---

    def begin_stroke(self, x: float, y: float) -> None:
        if self._current is not None:
            self.end_stroke()
        self._current = Stroke(points=[(x, y)], color=self.pen_color, width=self.pen_width)

    def add_point(self, x: float, y: float) -> None:
        if self._current is None:
            return
        self._current.points.append((x, y))

    def end_stroke(self) -> None:
        if self._current is None:
            return
        self.strokes.append(self._current)
        self._current = None

    def draw(self, points: List[Point]) -> None:
        """一次性录入一整笔，等价于 begin/add/end。"""
        if not points:
            return
        self.begin_stroke(*points[0])
        for x, y in points[1:]:
            self.add_point(x, y)
        self.end_stroke()

    # --- 编辑 ---

    def clear(self) -> None:
        self.strokes = []
        self._current = None

    def undo(self) -> None:
        """弹出最近一笔；空画布时什么也不做。"""
        self._current = None
        if self.strokes:
            self.strokes.pop()

    def is_empty(self) -> bool:
        return not self.strokes

    def to_data(self) -> List[Dict[str, Any]]:
        return [s.to_dict() for s in self.strokes]

    def from_data(self, data: List[Dict[str, Any]]) -> None:
        self._current = None
        self.strokes = [Stroke.from_dict(d) for d in data]

    # --- 导出 ---

    def render(self) -> Image.Image:
        img = Image.new("RGB", (self.width, self.height), self.background_color)
        draw = ImageDraw.Draw(img)
        for stroke in self.strokes:
            w = max(1, int(round(stroke.width)))
            r = stroke.width / 2
            if len(stroke.points) > 1:
                draw.line(stroke.points, fill=stroke.color, width=w, joint="curve")
            # 端点与单击的点补成圆点
            for x, y in (stroke.points[0], stroke.points[-1]):
                draw.ellipse((x - r, y - r, x + r, y + r), fill=stroke.color)
        return img

    def export_image(self) -> str:
        """返回当前画布的 PNG data URL。"""
        buf = io.BytesIO()
        self.render().save(buf, format="PNG")
        return bytes_to_data_url(buf.getvalue(), "image/png")
