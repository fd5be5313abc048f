import io
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from PIL import Image, ImageDraw

from formula_pad.main import app
from formula_pad.services import formula_service
from formula_pad.utils.pictures_utils import bytes_to_data_url


def make_png(size=(64, 48)) -> bytes:
    img = Image.new("RGB", size, "white")
    ImageDraw.Draw(img).line([(5, 5), (50, 40)], fill="black", width=3)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_data_url():
    return bytes_to_data_url(make_png(), "image/png")


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


class FakeGateway:
    """替换 `formula_service.to_latex`，记录调用参数并返回预设回复或抛出预设异常。"""

    def __init__(self, reply="x^{2}+1"):
        self.reply = reply
        self.error = None
        self.calls = []

    def __call__(self, image, *, model, language):
        self.calls.append({"image": image, "model": model, "language": language})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def gateway(monkeypatch):
    fake = FakeGateway()
    monkeypatch.setattr(formula_service, "to_latex", fake)
    return fake


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeOpenAI:
    """最小化的 OpenAI 客户端替身：`chat.completions.create(**kwargs)`。"""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.requests = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return completion(self.content)
