"""Visibility propagation service.

Applies one audience flag to a recipe and to every recipe linked to it
through sub-recipe references, so a sub-recipe is never hidden while its
parent is published (or the other way round).

Writes are sequential and not atomic: if recipe N fails, recipes 1..N-1
stay written. Re-running the same request converges the component.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_visibility.observability.logging import get_logger
from recipe_visibility.observability.metrics import PROPAGATION_RUNS
from recipe_visibility.services.visibility.exceptions import (
    WriteCredentialsMissingError,
)
from recipe_visibility.services.visibility.models import (
    PropagationResult,
    VisibilityChangeRequest,
)


if TYPE_CHECKING:
    from collections.abc import Iterable

    from recipe_visibility.content_store.protocol import RecipeReader
    from recipe_visibility.services.relations.service import RelationService
    from recipe_visibility.services.visibility.write_chain import WriteChain


logger = get_logger(__name__)


class VisibilityService:
    """Propagates visibility changes across connected recipes."""

    def __init__(
        self,
        reader: RecipeReader,
        relations: RelationService,
        write_chain: WriteChain,
    ) -> None:
        self._reader = reader
        self._relations = relations
        self._write_chain = write_chain

    async def set_visibility(
        self,
        seed_ids: Iterable[object] | None,
        audience: object,
        value: object,
    ) -> PropagationResult:
        """Set ``audience`` to ``value`` on the seeds and all related recipes.

        Args:
            seed_ids: Recipe ids chosen by the operator.
            audience: "public" or "enterprise".
            value: Target flag value.

        Returns:
            Ids written and ids of the whole related component.

        Raises:
            WriteCredentialsMissingError: If no write token is configured.
            InvalidVisibilityRequestError: If audience or value is invalid.
            WriteChainExhaustedError: If no channel could write a recipe.
            ContentStoreError: For read failures or unclassified write failures.
        """
        if not self._write_chain.is_configured:
            raise WriteCredentialsMissingError

        request = VisibilityChangeRequest.create(seed_ids, audience, value)

        if not request.seed_ids:
            return PropagationResult()

        try:
            result = await self._propagate(request)
        except Exception:
            PROPAGATION_RUNS.labels(
                audience=request.audience.value, result="error"
            ).inc()
            raise

        PROPAGATION_RUNS.labels(
            audience=request.audience.value,
            result="updated" if result.updated_ids else "noop",
        ).inc()
        return result

    async def _propagate(self, request: VisibilityChangeRequest) -> PropagationResult:
        related_ids = await self._relations.resolve_related_ids(request.seed_ids)
        if not related_ids:
            return PropagationResult()

        rows = await self._reader.fetch_visibility_rows(related_ids)
        current = {row.id: row.visibility for row in rows}

        logger.info(
            "Propagating visibility",
            audience=request.audience.value,
            value=request.value,
            seed_count=len(request.seed_ids),
            related_count=len(related_ids),
            existing_count=len(current),
        )

        updated_ids: list[str] = []
        for recipe_id in related_ids:
            visibility = current.get(recipe_id)
            if visibility is None:
                continue
            next_visibility = visibility.with_audience(request.audience, request.value)
            try:
                await self._write_chain.patch_visibility(recipe_id, next_visibility)
            except Exception:
                logger.warning(
                    "Propagation aborted",
                    failed_id=recipe_id,
                    written_ids=updated_ids,
                )
                raise
            updated_ids.append(recipe_id)

        logger.info(
            "Visibility propagated",
            updated_count=len(updated_ids),
            related_count=len(related_ids),
        )
        return PropagationResult(updated_ids=updated_ids, related_ids=related_ids)
