import base64

import pytest

from rotdex.imagegen.errors import EmptyResult, ProviderError, TransportError
from rotdex.imagegen.models import (
    AspectHint,
    GenerationParameters,
    ImageEncoding,
    ImagePrompt,
)
from rotdex.imagegen.providers import FlatPromptProvider, InstanceBasedProvider
from rotdex.testing import PNG_PIXEL, ProviderPayloadFactory, StubTransport

payloads = ProviderPayloadFactory()


def test_instance_request_shape():
    provider = InstanceBasedProvider(StubTransport())
    request = provider.build_request(
        ImagePrompt("dancing toaster", AspectHint.PORTRAIT),
        GenerationParameters(
            sample_count=2, negative_prompt="blurry", compression_quality=80, locale="en"
        ),
    )
    assert request["instances"] == [{"prompt": "dancing toaster"}]
    assert request["parameters"] == {
        "sampleCount": 2,
        "aspectRatio": "3:4",
        "negativePrompt": "blurry",
        "language": "en",
        "outputOptions": {"mimeType": "image/jpeg", "compressionQuality": 80},
    }


def test_flat_request_shape():
    provider = FlatPromptProvider(StubTransport(), model="deepseek-image-v2")
    request = provider.build_request(
        ImagePrompt("skibidi lighthouse", AspectHint.WIDE),
        GenerationParameters(quality="hd", response_format="b64_json"),
    )
    assert request == {
        "prompt": "skibidi lighthouse",
        "model": "deepseek-image-v2",
        "size": "1792x1024",
        "quality": "hd",
        "n": 1,
        "response_format": "b64_json",
    }


@pytest.mark.asyncio()
async def test_instance_provider_decodes_first_prediction():
    transport = StubTransport().reply(payloads.predictions(2, mime_type="image/webp"))
    provider = InstanceBasedProvider(transport)
    image = await provider.generate_image(ImagePrompt("cat"), GenerationParameters())
    assert image.encoding is ImageEncoding.INLINE_BASE64
    assert image.mime_type == "image/webp"
    assert image.data == PNG_PIXEL
    assert transport.requests[0].endpoint == "models/imagen-3.0-generate-002:predict"


@pytest.mark.asyncio()
async def test_flat_provider_returns_remote_url():
    transport = StubTransport().reply(payloads.flat_images(revised_prompt="a cat, detailed"))
    provider = FlatPromptProvider(transport)
    image = await provider.generate_image(ImagePrompt("cat"), GenerationParameters())
    assert image.encoding is ImageEncoding.REMOTE_URL
    assert image.source_url.endswith(".png")
    assert image.mime_type == "image/png"
    assert image.revised_prompt == "a cat, detailed"


@pytest.mark.asyncio()
async def test_flat_provider_accepts_b64_json():
    encoded = base64.b64encode(PNG_PIXEL).decode("ascii")
    transport = StubTransport().reply({"data": [{"b64_json": encoded}]})
    image = await FlatPromptProvider(transport).generate_image(
        ImagePrompt("cat"), GenerationParameters(response_format="b64_json")
    )
    assert image.encoding is ImageEncoding.INLINE_BASE64
    assert image.data == PNG_PIXEL


@pytest.mark.parametrize(
    "payload",
    [{}, {"predictions": []}, {"predictions": [{"mimeType": "image/png"}]}],
)
@pytest.mark.asyncio()
async def test_instance_provider_empty_results(payload):
    provider = InstanceBasedProvider(StubTransport().reply(payload))
    with pytest.raises(EmptyResult):
        await provider.generate_image(ImagePrompt("cat"), GenerationParameters())


@pytest.mark.asyncio()
async def test_flat_provider_entry_without_image_is_empty():
    provider = FlatPromptProvider(StubTransport().reply({"data": [{"revised_prompt": "x"}]}))
    with pytest.raises(EmptyResult):
        await provider.generate_image(ImagePrompt("cat"), GenerationParameters())


@pytest.mark.asyncio()
async def test_instance_error_body_becomes_provider_error():
    transport = StubTransport().fail(
        400, payloads.instance_error("INVALID_ARGUMENT", "bad aspect", code=400)
    )
    with pytest.raises(ProviderError) as excinfo:
        await InstanceBasedProvider(transport).generate_image(
            ImagePrompt("cat"), GenerationParameters()
        )
    error = excinfo.value
    assert (error.category, error.code, error.status) == ("INVALID_ARGUMENT", "400", 400)
    assert error.message == "bad aspect"


@pytest.mark.asyncio()
async def test_flat_error_body_becomes_provider_error():
    transport = StubTransport().fail(
        400, payloads.flat_error("content_policy_violation", "nope", code="blocked_prompt")
    )
    with pytest.raises(ProviderError) as excinfo:
        await FlatPromptProvider(transport).generate_image(
            ImagePrompt("cat"), GenerationParameters()
        )
    assert excinfo.value.category == "content_policy_violation"
    assert excinfo.value.code == "blocked_prompt"


@pytest.mark.asyncio()
async def test_unparseable_error_body_uses_http_category():
    transport = StubTransport().fail(502, "<html>Bad gateway</html>")
    with pytest.raises(ProviderError) as excinfo:
        await FlatPromptProvider(transport).generate_image(
            ImagePrompt("cat"), GenerationParameters()
        )
    assert excinfo.value.category == "http_error"
    assert excinfo.value.status == 502


@pytest.mark.asyncio()
async def test_connection_failure_propagates_as_transport_error():
    transport = StubTransport().fail(None)
    with pytest.raises(TransportError):
        await InstanceBasedProvider(transport).generate_image(
            ImagePrompt("cat"), GenerationParameters()
        )


@pytest.mark.parametrize(
    "kwargs",
    [{"sample_count": 0}, {"compression_quality": 101}, {"response_format": "png"}],
)
def test_generation_parameters_validation(kwargs):
    with pytest.raises(ValueError):
        GenerationParameters(**kwargs)


@pytest.mark.parametrize("payload", [{"predictions": [None]}, {"predictions": "oops"}])
@pytest.mark.asyncio()
async def test_instance_provider_malformed_predictions_are_empty(payload):
    provider = InstanceBasedProvider(StubTransport().reply(payload))
    with pytest.raises(EmptyResult):
        await provider.generate_image(ImagePrompt("cat"), GenerationParameters())


@pytest.mark.parametrize("payload", [{"data": [None]}, {"data": {"url": "x"}}, {"data": ["x"]}])
@pytest.mark.asyncio()
async def test_flat_provider_malformed_data_is_empty(payload):
    provider = FlatPromptProvider(StubTransport().reply(payload))
    with pytest.raises(EmptyResult):
        await provider.generate_image(ImagePrompt("cat"), GenerationParameters())


@pytest.mark.asyncio()
async def test_compressed_output_defaults_to_requested_jpeg():
    encoded = base64.b64encode(PNG_PIXEL).decode("ascii")
    transport = StubTransport().reply({"predictions": [{"bytesBase64Encoded": encoded}]})
    image = await InstanceBasedProvider(transport).generate_image(
        ImagePrompt("cat"), GenerationParameters(compression_quality=75)
    )
    assert image.mime_type == "image/jpeg"
    assert transport.requests[0].body["parameters"]["outputOptions"]["mimeType"] == "image/jpeg"


@pytest.mark.asyncio()
async def test_uncompressed_output_defaults_to_png():
    encoded = base64.b64encode(PNG_PIXEL).decode("ascii")
    transport = StubTransport().reply({"predictions": [{"bytesBase64Encoded": encoded}]})
    image = await InstanceBasedProvider(transport).generate_image(
        ImagePrompt("cat"), GenerationParameters()
    )
    assert image.mime_type == "image/png"
