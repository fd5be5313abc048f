"""
后端基础配置（OpenAI 多模态 + .env 自动加载）
---------------------------------
功能：
- 定义允许的前端跨域源（默认 vite 开发地址与本服务自身）。
- 定义 OpenAI 多模态调用配置：`OPENAI_BASE_URL`、`OPENAI_API_KEY`、默认模型与可选模型列表。
- 定义识别结果中错误提示所使用的语言 `OUTPUT_LANGUAGE`。
- 定义服务监听地址与端口（默认 `0.0.0.0:3333`）以及上传图片的大小上限。

使用说明：
- 请在部署环境中设置环境变量 `OPENAI_API_KEY`，也可通过 `.env` 注入；
- 如需更换模型，可设置 `FORMULA_MODEL`（默认模型）与 `FORMULA_MODELS`（逗号分隔的可选模型）；
- 如需兼容其它 OpenAI 协议的服务商，可设置 `OPENAI_BASE_URL`；
- `OUTPUT_LANGUAGE` 例如 `english`、`japanese`，模型判定无法识别时用该语言返回错误说明。
"""

from pathlib import Path
import os
from dotenv import find_dotenv, load_dotenv


# 注意：settings.py 位于 project_root/backend/formula_pad/config/
# 因此项目根目录应为 `parents[3]`
PROJECT_ROOT = Path(__file__).resolve().parents[3]
PACKAGE_DIR = Path(__file__).resolve().parents[1]
STATIC_DIR = PACKAGE_DIR / "static"

# 自动加载项目根目录 .env（若存在）。
# 注意：`override=False`，即环境变量已存在时不被 .env 覆盖，方便在生产环境直接通过系统环境变量注入。
_found = find_dotenv(filename=".env", usecwd=True)
if _found:
    load_dotenv(_found, override=False)
else:
    load_dotenv(str(PROJECT_ROOT / ".env"), override=False)

# --- 服务监听 ---
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3333))

# 允许跨域的前端地址
_origins_csv = os.getenv("FRONTEND_ORIGINS", "").strip()
if _origins_csv:
    FRONTEND_ORIGINS = [o.strip() for o in _origins_csv.split(",") if o.strip()]
else:
    FRONTEND_ORIGINS = [
        os.getenv("FRONTEND_ORIGIN", "http://localhost:5173"),
        f"http://localhost:{PORT}",
    ]

# --- OpenAI 配置 ---
# 为空时使用 SDK 默认端点
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL") or None
# 从环境变量或 .env 中读取 API Key，不要在代码中硬编码真实密钥。
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
# 单次调用超时（秒）
OPENAI_TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", 60))

DEFAULT_MODEL = os.getenv("FORMULA_MODEL", "gpt-4o")
_models_csv = os.getenv("FORMULA_MODELS", "").strip()
if _models_csv:
    SUPPORTED_MODELS = [m.strip() for m in _models_csv.split(",") if m.strip()]
else:
    SUPPORTED_MODELS = ["gpt-4o", "gpt-4o-mini", "gpt-4.1", "gpt-4.1-mini"]
# 默认模型始终可选
if DEFAULT_MODEL not in SUPPORTED_MODELS:
    SUPPORTED_MODELS.insert(0, DEFAULT_MODEL)

# --- 识别结果 ---
# 模型无法识别图片时，`ERROR:` 之后的说明文字所使用的语言
OUTPUT_LANGUAGE = os.getenv("OUTPUT_LANGUAGE", "english")
# 上传图片（base64 解码后）的字节上限，默认 5 MB
MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", 5 * 1024 * 1024))
