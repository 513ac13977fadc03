"""Vendor-specific provider clients.

Each client owns its vendor's full request and response schema and exposes the
same narrow ``generate_image`` coroutine. Clients never retry; non-success
statuses become :class:`ProviderError` with the vendor's category text left
untouched, and failures without any HTTP response propagate as
:class:`TransportError`.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import mimetypes
from typing import Any, Mapping, Protocol

from .errors import EmptyResult, ProviderError, TransportError
from .models import AspectHint, GeneratedImage, GenerationParameters, ImagePrompt
from .transport import Transport

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/png"
COMPRESSED_MIME_TYPE = "image/jpeg"


class ProviderClient(Protocol):
    name: str

    async def generate_image(
        self, prompt: ImagePrompt, params: GenerationParameters
    ) -> GeneratedImage:
        ...


class InstanceBasedProvider:
    """Imagen-style API: prompt instances in, base64 predictions out."""

    def __init__(
        self,
        transport: Transport,
        *,
        name: str = "imagen",
        endpoint: str = "models/imagen-3.0-generate-002:predict",
        output_mime_type: str = DEFAULT_MIME_TYPE,
    ) -> None:
        self.name = name
        self._transport = transport
        self._endpoint = endpoint
        self._output_mime_type = output_mime_type

    @property
    def transport(self) -> Transport:
        return self._transport

    def build_request(self, prompt: ImagePrompt, params: GenerationParameters) -> dict[str, Any]:
        parameters: dict[str, Any] = {
            "sampleCount": params.sample_count,
            "aspectRatio": (prompt.aspect_hint or AspectHint.SQUARE).value,
        }
        if params.negative_prompt:
            parameters["negativePrompt"] = params.negative_prompt
        if params.locale:
            parameters["language"] = params.locale
        if params.compression_quality is not None:
            parameters["outputOptions"] = {
                "mimeType": self.requested_mime_type(params),
                "compressionQuality": params.compression_quality,
            }
        return {"instances": [{"prompt": prompt.text}], "parameters": parameters}

    async def generate_image(
        self, prompt: ImagePrompt, params: GenerationParameters
    ) -> GeneratedImage:
        request = self.build_request(prompt, params)
        try:
            response = await self._transport.send(self._endpoint, request)
        except TransportError as exc:
            if exc.status is None:
                raise
            raise _provider_error(exc, _parse_instance_error) from exc
        return self.parse_response(response, self.requested_mime_type(params))

    def requested_mime_type(self, params: GenerationParameters) -> str:
        if params.compression_quality is not None:
            return COMPRESSED_MIME_TYPE
        return self._output_mime_type

    def parse_response(
        self, response: Mapping[str, Any], default_mime_type: str | None = None
    ) -> GeneratedImage:
        predictions = response.get("predictions") or []
        if not isinstance(predictions, list) or not predictions:
            raise EmptyResult(f"{self.name} returned no predictions")
        first = predictions[0]
        if not isinstance(first, dict):
            raise EmptyResult(f"{self.name} prediction is not an object")
        encoded = first.get("bytesBase64Encoded")
        if not encoded:
            raise EmptyResult(f"{self.name} prediction carries no image bytes")
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise EmptyResult(f"{self.name} prediction is not valid base64") from exc
        mime_type = first.get("mimeType") or default_mime_type or self._output_mime_type
        logger.debug("%s returned %s predictions; using the first.", self.name, len(predictions))
        return GeneratedImage.inline(data, mime_type, revised_prompt=first.get("prompt"))


class FlatPromptProvider:
    """OpenAI/DeepSeek-style API: single prompt in, URL (or base64) list out."""

    SIZES = {
        AspectHint.SQUARE: "1024x1024",
        AspectHint.PORTRAIT: "1024x1792",
        AspectHint.TALL: "1024x1792",
        AspectHint.LANDSCAPE: "1792x1024",
        AspectHint.WIDE: "1792x1024",
    }

    def __init__(
        self,
        transport: Transport,
        *,
        name: str = "deepseek",
        model: str = "deepseek-image",
        endpoint: str = "images/generations",
    ) -> None:
        self.name = name
        self._transport = transport
        self._model = model
        self._endpoint = endpoint

    @property
    def transport(self) -> Transport:
        return self._transport

    def build_request(self, prompt: ImagePrompt, params: GenerationParameters) -> dict[str, Any]:
        return {
            "prompt": prompt.text,
            "model": self._model,
            "size": self.SIZES[prompt.aspect_hint or AspectHint.SQUARE],
            "quality": params.quality,
            "n": params.sample_count,
            "response_format": params.response_format,
        }

    async def generate_image(
        self, prompt: ImagePrompt, params: GenerationParameters
    ) -> GeneratedImage:
        request = self.build_request(prompt, params)
        try:
            response = await self._transport.send(self._endpoint, request)
        except TransportError as exc:
            if exc.status is None:
                raise
            raise _provider_error(exc, _parse_flat_error) from exc
        return self.parse_response(response)

    def parse_response(self, response: Mapping[str, Any]) -> GeneratedImage:
        images = response.get("data") or []
        if not isinstance(images, list) or not images:
            raise EmptyResult(f"{self.name} returned no images")
        first = images[0]
        if not isinstance(first, dict):
            raise EmptyResult(f"{self.name} image entry is not an object")
        revised = first.get("revised_prompt")
        url = first.get("url")
        if url:
            mime_type = mimetypes.guess_type(url.split("?", 1)[0])[0] or DEFAULT_MIME_TYPE
            return GeneratedImage.remote(url, mime_type, revised_prompt=revised)
        encoded = first.get("b64_json")
        if encoded:
            try:
                data = base64.b64decode(encoded, validate=True)
            except (binascii.Error, ValueError) as exc:
                raise EmptyResult(f"{self.name} image is not valid base64") from exc
            return GeneratedImage.inline(data, DEFAULT_MIME_TYPE, revised_prompt=revised)
        raise EmptyResult(f"{self.name} image entry has neither url nor b64_json")


def _provider_error(exc: TransportError, parse) -> ProviderError:
    message, category, code = parse(exc.body)
    return ProviderError(
        message or str(exc),
        category=category or "http_error",
        code=code,
        status=exc.status,
    )


def _load_json(body: str) -> dict[str, Any]:
    try:
        data = json.loads(body) if body else {}
    except json.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def _parse_instance_error(body: str) -> tuple[str | None, str | None, str | None]:
    error = _load_json(body).get("error")
    if not isinstance(error, dict):
        return None, None, None
    code = error.get("code")
    return error.get("message"), error.get("status"), str(code) if code is not None else None


def _parse_flat_error(body: str) -> tuple[str | None, str | None, str | None]:
    data = _load_json(body)
    error = data.get("error") if isinstance(data.get("error"), dict) else data
    code = error.get("code")
    return error.get("message"), error.get("type"), str(code) if code is not None else None
