"""
命令行入口
---------------------------------
- `python -m formula_pad serve [--host H] [--port P] [--reload]`：用 uvicorn 启动后端（默认 0.0.0.0:3333）；
- `python -m formula_pad transcribe IMAGE [--server URL] [--model M]`：把本地图片提交给已启动的后端，打印识别结果。
"""

import argparse
import sys

import uvicorn

from .config.settings import HOST, PORT, DEFAULT_MODEL, SUPPORTED_MODELS
from .utils.logger import LOG_LEVEL, log


def _serve(args: argparse.Namespace) -> int:
    log.info(f"server running: http://localhost:{args.port}")
    uvicorn.run(
        "formula_pad.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=LOG_LEVEL.lower(),
    )
    return 0


def _transcribe(args: argparse.Namespace) -> int:
    from .client.api import FormulaApiClient, FormulaApiError
    from .client.controller import SubmissionController
    from .client.renderer import render, render_text
    from .utils.pictures_utils import image_to_data_url

    try:
        api = FormulaApiClient(base_url=args.server)
    except FormulaApiError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    with api:
        controller = SubmissionController(api)
        controller.select_model(args.model)
        # 本地图片直接作为预览图，走 resend 流程提交
        controller.state.preview_image = image_to_data_url(args.image)
        controller.resend()
        print(render_text(render(controller.state)))
        return 1 if controller.state.error_message is not None else 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="formula_pad", description="Handwritten formula to LaTeX")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="start the HTTP server")
    p_serve.add_argument("--host", default=HOST)
    p_serve.add_argument("--port", type=int, default=PORT)
    p_serve.add_argument("--reload", action="store_true")
    p_serve.set_defaults(func=_serve)

    p_tr = sub.add_parser("transcribe", help="send an image file to a running server")
    p_tr.add_argument("image")
    p_tr.add_argument("--server", default=f"http://localhost:{PORT}")
    p_tr.add_argument("--model", default=DEFAULT_MODEL, choices=SUPPORTED_MODELS)
    p_tr.set_defaults(func=_transcribe)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
