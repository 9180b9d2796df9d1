import base64

import pytest

from app.core.exceptions import SizeExceededError
from app.services.image_encoder import decode_image, encode_image, resolve_mime_type

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


class TestEncodeImage:
    @pytest.mark.anyio
    async def test_produces_data_url(self):
        url = await encode_image(PNG_HEADER, mime_type="image/png")

        assert url == "data:image/png;base64," + base64.b64encode(PNG_HEADER).decode()

    @pytest.mark.anyio
    async def test_limit_is_inclusive(self):
        url = await encode_image(b"\x00" * 2_000_000, mime_type="image/jpeg")
        assert url.startswith("data:image/jpeg;base64,")

    @pytest.mark.anyio
    async def test_one_byte_over_limit_fails_without_encoding(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            "app.services.image_encoder._to_data_url",
            lambda *args: calls.append(args) or "",
        )

        with pytest.raises(SizeExceededError) as exc_info:
            await encode_image(b"\x00" * 2_000_001, mime_type="image/jpeg")

        assert exc_info.value.size == 2_000_001
        assert exc_info.value.limit == 2_000_000
        assert calls == []

    @pytest.mark.anyio
    async def test_custom_limit(self):
        with pytest.raises(SizeExceededError):
            await encode_image(b"abcd", mime_type="image/png", max_bytes=3)

    @pytest.mark.anyio
    async def test_mime_type_guessed_from_filename(self):
        url = await encode_image(b"GIF89a", filename="logo.gif")
        assert url.startswith("data:image/gif;base64,")


class TestResolveMimeType:
    def test_explicit_wins(self):
        assert resolve_mime_type("image/webp", "photo.png") == "image/webp"

    def test_unknown_falls_back_to_octet_stream(self):
        assert resolve_mime_type(None, "blob") == "application/octet-stream"
        assert resolve_mime_type() == "application/octet-stream"


class TestDecodeImage:
    def test_splits_mime_and_bytes(self):
        url = "data:image/png;base64," + base64.b64encode(PNG_HEADER).decode()
        assert decode_image(url) == ("image/png", PNG_HEADER)

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/logo.png",
            "data:image/png,rawtext",
            "data:image/png;base64",
            "data:image/png;base64,@@@not-base64@@@",
        ],
    )
    def test_rejects_malformed(self, url):
        with pytest.raises(ValueError):
            decode_image(url)
