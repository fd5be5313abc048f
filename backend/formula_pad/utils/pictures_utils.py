"""
图片编码与校验工具（供多模态模型使用）
---------------------------------
功能：
- 将本地图片或内存中的 PNG 字节封装为 data URL，便于直接传递给支持 `image_url` 的对话模型；
- 解析前端提交的 data URL，校验 MIME、base64 内容、大小上限，并用 Pillow 确认确实是图片；
- 自动根据文件扩展名推断 MIME 类型（jpg/png/webp 等）。

使用说明：
- `image_to_data_url(path)` 返回形如 `data:image/jpeg;base64,<...>` 的字符串；
- `decode_data_url(url, max_bytes)` 返回 `(mime, bytes)`，不合法时抛出 `InvalidImageError`；
- 仅做编码与校验，不处理图像缩放/压缩。
"""

from __future__ import annotations

import base64
import binascii
import io
import mimetypes
import re
from pathlib import Path
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from .logger import get_logger

log = get_logger("pictures")

ALLOWED_MIME_TYPES = {"image/png", "image/jpeg", "image/webp", "image/gif"}

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)


class InvalidImageError(ValueError):
    """前端提交的图片不是可用的 base64 图片 data URL。"""


def _guess_mime(path: Path) -> str:
    """根据文件扩展名推断 MIME 类型，默认回退为 `application/octet-stream`。"""
    mime, _ = mimetypes.guess_type(str(path))
    if not mime:
        return "application/octet-stream"
    return mime


def bytes_to_data_url(content: bytes, mime: str = "image/png") -> str:
    b64 = base64.b64encode(content).decode("utf-8")
    return f"data:{mime};base64,{b64}"


def image_to_data_url(path: str | Path) -> str:
    """将图片文件编码为 base64 data URL。

    示例返回：`data:image/png;base64,iVBORw0KGgo...`
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"file not found: {p}")
    content = p.read_bytes()
    mime = _guess_mime(p)
    # 常用图片类型的简化修正：若 MIME 不以 image/ 开头但扩展名是常见图片，则按扩展名修正
    if not mime.startswith("image/"):
        suffix = p.suffix.lower()
        if suffix in {".jpg", ".jpeg"}:
            mime = "image/jpeg"
        elif suffix in {".png"}:
            mime = "image/png"
        elif suffix in {".webp"}:
            mime = "image/webp"
    log.debug(f"image_to_data_url: {p} -> {mime}, bytes={len(content)}")
    return bytes_to_data_url(content, mime)


def decode_data_url(url: str, max_bytes: int) -> Tuple[str, bytes]:
    """解析并校验图片 data URL。

    校验顺序：
    1) 形如 `data:<mime>;base64,<payload>`；
    2) MIME 属于 `ALLOWED_MIME_TYPES`；
    3) payload 为合法 base64，且解码后不超过 `max_bytes`；
    4) Pillow 能识别为图片，且像素数未超过 Pillow 的解压炸弹上限。
    """
    m = _DATA_URL_RE.match(url.strip())
    if not m:
        raise InvalidImageError("formula must be a base64 image data URL")
    mime = m.group("mime").lower()
    if mime not in ALLOWED_MIME_TYPES:
        raise InvalidImageError(f"unsupported image type: {mime}")

    payload = m.group("payload")
    # base64 编码后约为原始大小的 4/3，先粗略拦截超大请求，避免无谓解码
    if len(payload) > (max_bytes * 4) // 3 + 4:
        raise InvalidImageError(f"image exceeds {max_bytes} bytes")
    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidImageError("image payload is not valid base64")
    if not content:
        raise InvalidImageError("image payload is empty")
    if len(content) > max_bytes:
        raise InvalidImageError(f"image exceeds {max_bytes} bytes")

    try:
        with Image.open(io.BytesIO(content)) as img:
            img.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
        log.warning(f"decode_data_url: Pillow rejected payload ({mime}): {e}")
        raise InvalidImageError("image payload could not be decoded")
    return mime, content
