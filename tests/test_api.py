from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app


class FakeUpstream:
    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: dict[tuple[str, str], httpx.Response] = {}
        self.error: Exception | None = None

    def respond(self, method: str, url: str, response: httpx.Response) -> None:
        self.responses[(method, url)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        key = (request.method, str(request.url))
        if key not in self.responses:
            return httpx.Response(404, text=f"no route for {key}")
        return self.responses[key]

    def factory(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


NEBIUS_URL = "https://api.studio.nebius.com/v1/images/generations"
SDXL_URL = "https://router.huggingface.co/nscale/v1/images/generations"
QWEN_URL = "https://router.huggingface.co/fal-ai/fal-ai/qwen-image"
FLUX_URL = "https://router.huggingface.co/fal-ai/fal-ai/flux/dev"


@pytest.fixture()
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture()
def settings() -> Settings:
    return Settings(nebius_api_key="nebius-key", hf_token="hf-token")


@pytest.fixture()
def client(settings: Settings, upstream: FakeUpstream) -> TestClient:
    return TestClient(create_app(settings=settings, http_client_factory=upstream.factory))


def test_generate_image_success(client: TestClient, upstream: FakeUpstream):
    upstream.respond(
        "POST",
        NEBIUS_URL,
        httpx.Response(200, json={"data": [{"b64_json": "QUJD"}]}),
    )

    response = client.post("/generate-image", json={"prompt": "a red fox"})

    assert response.status_code == 200
    assert response.json() == {"imageData": "data:image/png;base64,QUJD"}

    assert len(upstream.requests) == 1
    sent = upstream.requests[0]
    assert sent.headers["authorization"] == "Bearer nebius-key"
    body = json.loads(sent.content)
    assert body["model"] == "black-forest-labs/flux-schnell"
    assert body["prompt"] == "a red fox"
    assert body["response_format"] == "b64_json"
    assert body["width"] == 1024
    assert body["height"] == 1024
    assert body["num_inference_steps"] == 4


def test_generate_image_multi_defaults_to_stable_diffusion(
    client: TestClient,
    upstream: FakeUpstream,
):
    upstream.respond(
        "POST",
        SDXL_URL,
        httpx.Response(200, json={"data": [{"b64_json": "QUJD"}]}),
    )

    response = client.post("/generate-image-multi", json={"prompt": "a lighthouse"})

    assert response.status_code == 200
    assert response.json() == {"imageData": "data:image/png;base64,QUJD"}

    sent = upstream.requests[0]
    assert sent.headers["authorization"] == "Bearer hf-token"
    assert json.loads(sent.content) == {
        "response_format": "b64_json",
        "prompt": "a lighthouse",
        "model": "stabilityai/stable-diffusion-xl-base-1.0",
    }


def test_generate_image_multi_fetches_hosted_image(
    client: TestClient,
    upstream: FakeUpstream,
):
    upstream.respond(
        "POST",
        QWEN_URL,
        httpx.Response(200, json={"images": [{"url": "http://x/img.png"}]}),
    )
    upstream.respond("GET", "http://x/img.png", httpx.Response(200, content=b"ABC"))

    response = client.post(
        "/generate-image-multi",
        json={"prompt": "a teapot", "model": "qwen-image"},
    )

    assert response.status_code == 200
    assert response.json() == {"imageData": "data:image/png;base64,QUJD"}

    assert [r.method for r in upstream.requests] == ["POST", "GET"]
    assert json.loads(upstream.requests[0].content) == {
        "prompt": "a teapot",
        "image_size": "square_hd",
        "num_inference_steps": 25,
        "guidance_scale": 3.5,
    }


def test_generate_image_multi_flux_family(client: TestClient, upstream: FakeUpstream):
    upstream.respond(
        "POST",
        FLUX_URL,
        httpx.Response(200, json={"image": {"url": "http://x/flux.png"}}),
    )
    upstream.respond("GET", "http://x/flux.png", httpx.Response(200, content=b"ABC"))

    response = client.post(
        "/generate-image-multi",
        json={"prompt": "a canyon", "model": "flux-dev"},
    )

    assert response.status_code == 200
    assert response.json()["imageData"] == "data:image/png;base64,QUJD"
    body = json.loads(upstream.requests[0].content)
    assert body["image_size"] == "landscape_4_3"
    assert body["num_inference_steps"] == 28


@pytest.mark.parametrize("path", ["/generate-image", "/generate-image-multi"])
@pytest.mark.parametrize("payload", [{}, {"prompt": ""}, {"prompt": "   \n\t"}])
def test_empty_prompt_returns_400(
    client: TestClient,
    upstream: FakeUpstream,
    path: str,
    payload: dict,
):
    response = client.post(path, json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "Prompt is required"
    assert upstream.requests == []


def test_unknown_model_returns_400(client: TestClient, upstream: FakeUpstream):
    response = client.post(
        "/generate-image-multi",
        json={"prompt": "a cat", "model": "not-a-model"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid model selected"}
    assert upstream.requests == []


@pytest.mark.parametrize("path", ["/generate-image", "/generate-image-multi"])
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
def test_non_post_returns_405(client: TestClient, path: str, method: str):
    response = client.request(method, path)

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}


def test_upstream_error_status_is_reported(client: TestClient, upstream: FakeUpstream):
    upstream.respond("POST", SDXL_URL, httpx.Response(503, text="overloaded"))

    response = client.post("/generate-image-multi", json={"prompt": "a cat"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to generate image"
    assert "503" in body["details"]
    assert "overloaded" in body["details"]
    assert "imageData" not in body


def test_upstream_error_on_baseline_endpoint(client: TestClient, upstream: FakeUpstream):
    upstream.respond("POST", NEBIUS_URL, httpx.Response(401, text="bad key"))

    response = client.post("/generate-image", json={"prompt": "a cat"})

    assert response.status_code == 500
    assert "401 bad key" in response.json()["details"]


@pytest.mark.parametrize(
    "model, url",
    [("stable-diffusion-xl", SDXL_URL), ("qwen-image", QWEN_URL)],
)
def test_unrecognized_response_shape_returns_500(
    client: TestClient,
    upstream: FakeUpstream,
    model: str,
    url: str,
):
    upstream.respond("POST", url, httpx.Response(200, json={"status": "done"}))

    response = client.post("/generate-image-multi", json={"prompt": "x", "model": model})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to generate image"
    assert "Invalid response format" in body["details"]


def test_non_json_upstream_body_returns_500(client: TestClient, upstream: FakeUpstream):
    upstream.respond("POST", NEBIUS_URL, httpx.Response(200, text="<html>oops</html>"))

    response = client.post("/generate-image", json={"prompt": "x"})

    assert response.status_code == 500
    assert "Invalid response format" in response.json()["details"]


def test_failed_image_download_returns_500(client: TestClient, upstream: FakeUpstream):
    upstream.respond(
        "POST",
        QWEN_URL,
        httpx.Response(200, json={"data": [{"url": "http://x/gone.png"}]}),
    )
    upstream.respond("GET", "http://x/gone.png", httpx.Response(404, text="missing"))

    response = client.post(
        "/generate-image-multi",
        json={"prompt": "x", "model": "qwen-image"},
    )

    assert response.status_code == 500
    assert "404 missing" in response.json()["details"]


def test_transport_failure_is_wrapped(client: TestClient, upstream: FakeUpstream):
    upstream.error = httpx.ConnectError("connection refused")

    response = client.post("/generate-image-multi", json={"prompt": "x"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to generate image"
    assert "connection refused" in body["details"]


@pytest.mark.parametrize(
    "path, payload, message",
    [
        ("/generate-image", {"prompt": "x"}, "Nebius API key not configured"),
        ("/generate-image-multi", {"prompt": "x"}, "Hugging Face token not configured"),
    ],
)
def test_missing_credential_returns_500(
    upstream: FakeUpstream,
    path: str,
    payload: dict,
    message: str,
):
    client = TestClient(
        create_app(settings=Settings(), http_client_factory=upstream.factory)
    )

    response = client.post(path, json=payload)

    assert response.status_code == 500
    assert response.json() == {"error": message}
    assert upstream.requests == []


def test_prompt_is_validated_before_credentials(upstream: FakeUpstream):
    client = TestClient(
        create_app(settings=Settings(), http_client_factory=upstream.factory)
    )

    response = client.post("/generate-image-multi", json={"prompt": ""})

    assert response.status_code == 400


def test_malformed_json_body_returns_400(client: TestClient):
    response = client.post(
        "/generate-image",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_models_endpoint_lists_registry(client: TestClient):
    response = client.get("/models")

    assert response.status_code == 200
    assert response.json()["data"] == [
        {"id": "stable-diffusion-xl", "label": "Stable Diffusion XL"},
        {"id": "qwen-image", "label": "Qwen Image"},
        {"id": "flux-dev", "label": "FLUX.1 [dev]"},
    ]


def test_healthz(client: TestClient):
    response = client.get("/internal/healthz")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "credentials": {"nebius": True, "huggingface": True},
    }
