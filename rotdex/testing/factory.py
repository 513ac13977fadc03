"""Factories for tests and prototyping."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from random import Random

from faker import Faker

from ..imagegen.models import AspectHint, ImagePrompt

# Smallest valid PNG: 1x1 transparent pixel.
PNG_PIXEL = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


@dataclass(slots=True)
class PromptFactory:
    faker: Faker = field(default_factory=Faker)
    rng: Random = field(default_factory=Random)

    def build(self, aspect_hint: AspectHint | None = None) -> ImagePrompt:
        text = f"{self.faker.color_name()} {self.faker.word()} wearing {self.faker.word()}"
        return ImagePrompt(text=text, aspect_hint=aspect_hint)

    def build_random_aspect(self) -> ImagePrompt:
        return self.build(self.rng.choice(list(AspectHint)))


@dataclass(slots=True)
class ProviderPayloadFactory:
    """Vendor-shaped JSON bodies for provider tests."""

    faker: Faker = field(default_factory=Faker)

    def predictions(self, count: int = 1, *, mime_type: str = "image/png") -> dict:
        encoded = base64.b64encode(PNG_PIXEL).decode("ascii")
        return {
            "predictions": [
                {"bytesBase64Encoded": encoded, "mimeType": mime_type} for _ in range(count)
            ]
        }

    def flat_images(self, count: int = 1, *, revised_prompt: str | None = None) -> dict:
        return {
            "created": int(self.faker.unix_time()),
            "data": [
                {
                    "url": f"https://{self.faker.domain_name()}/images/{self.faker.uuid4()}.png",
                    "revised_prompt": revised_prompt,
                }
                for _ in range(count)
            ],
        }

    def instance_error(self, status: str, message: str = "", code: int = 400) -> dict:
        return {"error": {"code": code, "message": message or self.faker.sentence(), "status": status}}

    def flat_error(self, error_type: str, message: str = "", code: str | None = None) -> dict:
        return {"error": {"message": message or self.faker.sentence(), "type": error_type, "code": code}}
