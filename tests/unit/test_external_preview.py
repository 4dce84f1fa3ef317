"""Tests for the external preview proxy."""

import io

import httpx
import pytest

from neo_files.core.exceptions import ExternalPreviewError
from neo_files.core.value_objects import ArtifactState, PreviewArtifact, PreviewDimensions
from neo_files.infrastructure.generators import ExternalPreviewProxy, extension_for_content_type

SERVICE_URL = "http://renderer.test/preview"
RENDERED = b"\x89PNG rendered preview bytes" * 1000


@pytest.fixture
def artifact(tmp_path):
    artifact = PreviewArtifact.for_source(tmp_path / "report.pdf", PreviewDimensions(100, 80))
    artifact.ensure_folder()
    return artifact


def make_proxy(handler) -> ExternalPreviewProxy:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ExternalPreviewProxy(client, SERVICE_URL, timeout=5.0, pipe_depth=4)


class TestExtensionForContentType:
    """Test mapping of the response content type to the artifact extension."""

    @pytest.mark.parametrize("content_type, expected", [
        ("image/png", ".png"),
        ("IMAGE/PNG; charset=binary", ".png"),
        ("image/jpeg", ".jpg"),
        ("application/octet-stream", ".jpg"),
        ("", ".jpg"),
    ])
    def test_mapping(self, content_type, expected):
        assert extension_for_content_type(content_type) == expected


class TestExternalPreviewProxy:
    """Test the streamed request and the persisted response."""

    @pytest.mark.asyncio
    async def test_request_parts_and_png_response(self, artifact):
        seen = {}

        async def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = await request.aread()
            seen["content_type"] = request.headers["content-type"]
            return httpx.Response(200, headers={"content-type": "image/png"}, content=RENDERED)

        proxy = make_proxy(handler)
        source = io.BytesIO(b"%PDF-1.4 source document")

        outcome = await proxy.render(source, artifact, "report.pdf", PreviewDimensions(100, 80))

        assert outcome.extension == ".png"
        assert outcome.path == artifact.path_for(".png")
        # persisted length equals the length the service sent
        assert outcome.path.stat().st_size == len(RENDERED)
        assert outcome.path.read_bytes() == RENDERED

        body = seen["body"]
        assert seen["content_type"].startswith("multipart/form-data; boundary=")
        positions = [
            body.index(b'name="width"\r\n\r\n100'),
            body.index(b'name="height"\r\n\r\n80'),
            body.index(b'name="name"\r\n\r\nreport.pdf'),
            body.index(b'name="file"; filename="report.pdf"'),
        ]
        assert positions == sorted(positions)
        assert b"%PDF-1.4 source document" in body

    @pytest.mark.asyncio
    async def test_jpeg_response(self, artifact):
        async def handler(request: httpx.Request) -> httpx.Response:
            await request.aread()
            return httpx.Response(200, headers={"content-type": "image/jpeg"}, content=b"\xff\xd8jpeg")

        outcome = await make_proxy(handler).render(
            io.BytesIO(b"data"), artifact, "report.pdf", PreviewDimensions(100, 80)
        )
        assert outcome.extension == ".jpg"
        assert artifact.probe().state == ArtifactState.READY

    @pytest.mark.asyncio
    async def test_non_200_response(self, artifact):
        async def handler(request: httpx.Request) -> httpx.Response:
            await request.aread()
            return httpx.Response(500, content=b"renderer crashed")

        with pytest.raises(ExternalPreviewError) as exc_info:
            await make_proxy(handler).render(
                io.BytesIO(b"data"), artifact, "report.pdf", PreviewDimensions(100, 80)
            )
        assert exc_info.value.status_code == 500
        assert artifact.probe().state == ArtifactState.MISSING

    @pytest.mark.asyncio
    async def test_rejected_upload(self, artifact):
        async def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(413, content=b"too large")

        with pytest.raises(ExternalPreviewError):
            await make_proxy(handler).render(
                io.BytesIO(b"x" * 1_000_000), artifact, "big.pdf", PreviewDimensions(100, 80)
            )

    @pytest.mark.asyncio
    async def test_transport_error(self, artifact):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ExternalPreviewError):
            await make_proxy(handler).render(
                io.BytesIO(b"data"), artifact, "report.pdf", PreviewDimensions(100, 80)
            )
        assert artifact.probe().state == ArtifactState.MISSING

    @pytest.mark.asyncio
    async def test_invalid_service_url(self, artifact):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.InvalidURL("Invalid URL 'http://renderer.test:port'")

        with pytest.raises(ExternalPreviewError):
            await make_proxy(handler).render(
                io.BytesIO(b"data"), artifact, "report.pdf", PreviewDimensions(100, 80)
            )
        assert artifact.probe().state == ArtifactState.MISSING
