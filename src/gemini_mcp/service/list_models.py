"""ListModels use case - trim the catalogue down to public summaries."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ..domain.errors import DomainError, is_domain_error
from ..domain.model_catalog import ModelSummary
from ..domain.ports import GenerativeModelPort


class ListModelsOutput(BaseModel):
    models: tuple[ModelSummary, ...]
    count: int

    model_config = ConfigDict(frozen=True)


class ListModelsUseCase:
    """An empty catalogue is a valid result (count=0), not an error."""

    def __init__(self, port: GenerativeModelPort):
        self._port = port

    async def execute(self) -> ListModelsOutput | DomainError:
        result = await self._port.list_models()
        if is_domain_error(result):
            return result

        summaries = tuple(model.summary() for model in result)
        return ListModelsOutput(models=summaries, count=len(summaries))


__all__ = ["ListModelsOutput", "ListModelsUseCase"]
