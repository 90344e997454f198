from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class GenerateImageRequest(BaseModel):
    prompt: str | None = None

    model_config = ConfigDict(extra="ignore")


class GenerateMultiImageRequest(BaseModel):
    prompt: str | None = None
    # None means "use the default model"; an explicit unknown id is rejected.
    model: str | None = None

    model_config = ConfigDict(extra="ignore")


class GenerateImageResponse(BaseModel):
    imageData: str


class ModelCard(BaseModel):
    id: str
    label: str


class ModelList(BaseModel):
    data: list[ModelCard]
