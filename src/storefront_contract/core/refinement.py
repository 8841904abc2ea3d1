"""
Entity refinement - derive narrower schemas from generic platform schemas.

A refinement drops fields of a base model and adds replacement fields. A
replacement may name other refinements of the same set (or itself) as string
forward references; once the set is finalized those references resolve to the
refined models, so a refined tree is refined at every depth:

    refinements = RefinementSet(__name__)
    refinements.add(
        "ExtendedCategory",
        Category,
        exclude={"children"},
        replace={"children": Optional[List["ExtendedCategory"]]},
    )
    refinements.build()
    ExtendedCategory = refinements["ExtendedCategory"]
    refinements.finalize()

Invariant checked by ``finalize``: no field of a refined model, copied or
replaced, may reach a base model of the same set, directly or through models
that are not refined. Otherwise the refined tree would fall back to the generic
schema further down.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional, Union, get_args

from pydantic import BaseModel, create_model

from .errors import RefinementError
from .models import schema_root

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Refinement:
    """Definition of one refined model."""
    name: str
    base: Union[type[BaseModel], str]  # model class or name of an earlier refinement
    exclude: frozenset[str] = frozenset()
    replace: Mapping[str, Any] = field(default_factory=dict)


def referenced_models(annotation: Any) -> Iterator[type[BaseModel]]:
    """
    Yield every pydantic model directly mentioned in a type annotation.

    ``Optional[List[Category]]`` -> Category. Does not descend into the
    fields of the models found.
    """
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        yield annotation
        return
    for arg in get_args(annotation):
        yield from referenced_models(arg)


def reachable_models(
    annotation: Any,
    boundary: Union[set, frozenset] = frozenset(),
    seen: Optional[set] = None,
) -> Iterator[type[BaseModel]]:
    """
    Yield every pydantic model reachable from a type annotation, once each.

    Descends into the fields of the models found, except models in
    ``boundary``. Unresolved forward references are skipped.
    """
    seen = set() if seen is None else seen
    for model in referenced_models(annotation):
        if model in seen:
            continue
        seen.add(model)
        yield model
        if model not in boundary:
            for info in model.model_fields.values():
                yield from reachable_models(info.annotation, boundary, seen)


class RefinementSet:
    """
    Ordered collection of refinements built into pydantic models.

    Lifecycle: ``add`` -> ``build`` -> assign models to module names ->
    ``finalize``. Forward references are looked up in the module passed to
    the constructor.
    """

    def __init__(self, module: str):
        self.module = module
        self._refinements: dict[str, Refinement] = {}
        self._models: dict[str, type[BaseModel]] = {}
        self._finalized = False

    def add(
        self,
        name: str,
        base: Union[type[BaseModel], str],
        exclude: Union[set[str], frozenset[str], tuple[str, ...]] = (),
        replace: Mapping[str, Any] | None = None,
    ) -> Refinement:
        """
        Register a refinement.

        Args:
            name: Name of the refined model
            base: Base model, or name of a refinement added earlier
            exclude: Field names dropped from the base
            replace: Field name -> annotation, or (annotation, default).
                A bare annotation gets a None default.

        Raises:
            RefinementError: On duplicate names or unknown string bases
        """
        if self._models:
            raise RefinementError("Refinement set is already built", entity=name)
        if name in self._refinements:
            raise RefinementError("Duplicate refinement", entity=name)
        if isinstance(base, str) and base not in self._refinements:
            raise RefinementError(f"Unknown base refinement '{base}'", entity=name)

        refinement = Refinement(
            name=name,
            base=base,
            exclude=frozenset(exclude),
            replace=dict(replace or {}),
        )
        self._refinements[name] = refinement
        return refinement

    def build(self) -> dict[str, type[BaseModel]]:
        """
        Create a model for every refinement, in declaration order.

        Returns:
            Dict of refinement name -> model
        """
        for refinement in self._refinements.values():
            base = self.base_of(refinement.name)
            unknown = refinement.exclude - set(base.model_fields)
            if unknown:
                raise RefinementError(
                    f"Excluded fields not found on {base.__name__}: {sorted(unknown)}",
                    entity=refinement.name,
                )

            fields: dict[str, Any] = {}
            for field_name, info in base.model_fields.items():
                if field_name in refinement.exclude or field_name in refinement.replace:
                    continue
                fields[field_name] = (info.annotation, copy.copy(info))

            for field_name, definition in refinement.replace.items():
                fields[field_name] = definition if isinstance(definition, tuple) else (definition, None)

            self._models[refinement.name] = create_model(
                refinement.name,
                __base__=schema_root(base),
                __module__=self.module,
                __doc__=f"{base.__name__} refined for the storefront.",
                **fields,
            )

        logger.debug(f"Built {len(self._models)} refinements in {self.module}")
        return dict(self._models)

    def finalize(self) -> None:
        """
        Check the refinement invariant and resolve forward references.

        Raises:
            RefinementError: If a field still reaches a refined base
        """
        if not self._models:
            raise RefinementError("Refinement set must be built before finalize")

        refined_bases: dict[type[BaseModel], list[str]] = {}
        for name in self._refinements:
            refined_bases.setdefault(self.base_of(name), []).append(name)

        boundary = set(refined_bases) | set(self._models.values())
        for refinement in self._refinements.values():
            for field_name, annotation in self._field_annotations(refinement):
                for model in reachable_models(annotation, boundary):
                    if model in refined_bases:
                        raise RefinementError(
                            f"Field keeps base entity {model.__name__}, "
                            f"which is refined as {', '.join(refined_bases[model])}",
                            entity=refinement.name,
                            field=field_name,
                        )

        namespace = dict(self._models)
        for model in self._models.values():
            model.model_rebuild(force=True, _types_namespace=namespace)

        self._finalized = True

    def _field_annotations(self, refinement: Refinement) -> Iterator[tuple[str, Any]]:
        """Annotations of the refined model: copied base fields, then replacements."""
        base = self.base_of(refinement.name)
        for field_name, info in base.model_fields.items():
            if field_name not in refinement.exclude and field_name not in refinement.replace:
                yield field_name, info.annotation
        for field_name, definition in refinement.replace.items():
            yield field_name, definition[0] if isinstance(definition, tuple) else definition

    @property
    def finalized(self) -> bool:
        return self._finalized

    def base_of(self, name: str) -> type[BaseModel]:
        """Resolved base model of a refinement."""
        base = self._refinements[name].base
        if isinstance(base, str):
            if base not in self._models:
                raise RefinementError(f"Base refinement '{base}' is not built yet", entity=name)
            return self._models[base]
        return base

    def __getitem__(self, name: str) -> type[BaseModel]:
        try:
            return self._models[name]
        except KeyError:
            raise RefinementError("Refinement is not built", entity=name) from None

    def __contains__(self, name: str) -> bool:
        return name in self._refinements

    def __iter__(self) -> Iterator[str]:
        return iter(self._refinements)

    def __len__(self) -> int:
        return len(self._refinements)
