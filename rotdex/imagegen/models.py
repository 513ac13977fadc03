"""Value types shared by providers and the gateway."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AspectHint(str, Enum):
    SQUARE = "1:1"
    PORTRAIT = "3:4"
    LANDSCAPE = "4:3"
    TALL = "9:16"
    WIDE = "16:9"


class ImageEncoding(str, Enum):
    INLINE_BASE64 = "inline-base64"
    REMOTE_URL = "remote-url"


@dataclass(frozen=True, slots=True)
class ImagePrompt:
    text: str
    aspect_hint: AspectHint | None = None


@dataclass(frozen=True, slots=True)
class GenerationParameters:
    """Knobs understood by every provider; each maps them onto its own schema."""

    sample_count: int = 1
    negative_prompt: str | None = None
    compression_quality: int | None = None
    locale: str | None = None
    quality: str = "standard"
    response_format: str = "url"

    def __post_init__(self) -> None:
        if self.sample_count <= 0:
            raise ValueError("sample_count must be positive")
        if self.compression_quality is not None and not 0 <= self.compression_quality <= 100:
            raise ValueError("compression_quality must be between 0 and 100")
        if self.response_format not in {"url", "b64_json"}:
            raise ValueError("response_format must be 'url' or 'b64_json'")


@dataclass(frozen=True, slots=True)
class GeneratedImage:
    encoding: ImageEncoding
    mime_type: str
    data: bytes | None = None
    source_url: str | None = None
    revised_prompt: str | None = None

    def __post_init__(self) -> None:
        if self.encoding is ImageEncoding.INLINE_BASE64:
            if self.data is None or self.source_url is not None:
                raise ValueError("inline-base64 images carry bytes and no URL")
        elif self.source_url is None or self.data is not None:
            raise ValueError("remote-url images carry a URL and no bytes")

    @classmethod
    def inline(
        cls, data: bytes, mime_type: str, *, revised_prompt: str | None = None
    ) -> "GeneratedImage":
        return cls(
            encoding=ImageEncoding.INLINE_BASE64,
            mime_type=mime_type,
            data=data,
            revised_prompt=revised_prompt,
        )

    @classmethod
    def remote(
        cls, url: str, mime_type: str, *, revised_prompt: str | None = None
    ) -> "GeneratedImage":
        return cls(
            encoding=ImageEncoding.REMOTE_URL,
            mime_type=mime_type,
            source_url=url,
            revised_prompt=revised_prompt,
        )
