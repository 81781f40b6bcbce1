"""Model Catalog - Configuration-Driven Gemini Model Metadata.

Provides the static, advisory list of Gemini models shown to callers by
list_gemini_models and used to decorate tool descriptions. The catalogue is
loaded from JSON configuration and validated once at startup.

Architecture:
    ModelCatalog: Root container, loaded from model_metadata.json
    ├─ ModelInfo: One selectable model with limits and supported methods
    └─ ModelSummary: Trimmed public view (name, display name, description)

Important:
    The catalogue is NOT an allow-list. Gemini accepts any valid model
    string, and queries are never rejected for naming a model absent here.
    Only the adapter's get_model lookup consults it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, RootModel, model_validator
from pydantic.alias_generators import to_camel

DEFAULT_CATALOG_PATH = Path(__file__).with_name("model_metadata.json")


class ModelInfo(BaseModel):
    """A Gemini model as described in the catalogue.

    Attributes:
        name: Stable identifier passed to the API (e.g. "gemini-2.5-flash")
        display_name: Human-readable label
        description: One-line usage note
        input_token_limit: Context window size in tokens
        output_token_limit: Maximum generated tokens
        supported_generation_methods: API methods the model serves
    """

    name: str
    display_name: str
    description: str
    input_token_limit: int
    output_token_limit: int
    supported_generation_methods: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    def summary(self) -> ModelSummary:
        return ModelSummary(name=self.name, display_name=self.display_name, description=self.description)


class ModelSummary(BaseModel):
    """Public view of a ModelInfo. Derived, never persisted.

    Serializes with camelCase keys (displayName) to match the tool contract.
    """

    name: str
    display_name: str
    description: str

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ModelCatalog(RootModel[tuple[ModelInfo, ...]]):
    """Ordered catalogue of known models - wraps tuple for validation."""

    root: tuple[ModelInfo, ...] = ()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_duplicate_names(self) -> ModelCatalog:
        """Reject catalogues that list the same model name twice.

        Raises:
            ValueError: If any name appears more than once
        """
        names = [model.name for model in self.root]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate model names in catalog: {duplicates}")
        return self

    @classmethod
    def from_list(cls, data: list[dict[str, Any]]) -> ModelCatalog:
        return cls.model_validate(data)

    @classmethod
    def from_json_file(cls, path: Path = DEFAULT_CATALOG_PATH) -> ModelCatalog:
        """Load and validate catalog from JSON."""
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls.from_list(data["models"])

    def find(self, name: str) -> ModelInfo:
        """Exact-name lookup.

        Raises:
            KeyError: If name is not in the catalogue
        """
        model = next((model for model in self.root if model.name == name), None)
        if model is None:
            raise KeyError(f"Model '{name}' not in catalog")
        return model

    def names(self) -> tuple[str, ...]:
        return tuple(model.name for model in self.root)

    def options_description(self, popular: int = 3) -> str:
        """Tool-schema hint emphasising that any model string works."""
        listed = ", ".join(self.names()[:popular])
        return f"Any valid Gemini model. See https://ai.google.dev/gemini-api/docs/models. Popular: {listed}"

    def __len__(self) -> int:
        return len(self.root)


__all__ = [
    "DEFAULT_CATALOG_PATH",
    "ModelCatalog",
    "ModelInfo",
    "ModelSummary",
]
