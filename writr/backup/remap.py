#!/usr/bin/env python3
"""
remap.py
--------------------
Re-key a project graph so it can be stored next to its original.

`remap_project_ids()` returns an isomorphic copy of a graph in which every
record has a fresh identifier and every reference has been rewritten to
match. The substitution map is local to the call and identifiers come from
an injected factory, so concurrent calls never share state.

How each field is rewritten is read from its reference kind (see
writr.database.schemas):

    RecordId     -> substituted; always present in the map
    ProjectRef   -> the new project id, unconditionally
    StrictRef    -> substituted; a miss raises ReferentialIntegrityError
    OptionalRef  -> substituted when mapped, otherwise passed through
    RefList      -> each element substituted when mapped, otherwise kept

Only identifiers, references and the project title change; timestamps and
every other field are copied verbatim.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import uuid
from typing import Any, Callable, Dict, List, Optional, TypeVar

# --- Local imports ---
from writr.core.exceptions import ReferentialIntegrityError
from writr.database.schemas import Record, RefKind, reference_fields
from .types import ProjectGraph

IdFactory = Callable[[], str]
IdMap = Dict[str, str]
R = TypeVar("R", bound=Record)

COPY_SUFFIX = " (Copy)"


def new_uuid() -> str:
    return str(uuid.uuid4())


def _resolve_strict(id_map: IdMap, old_id: str, field_name: str) -> str:
    try:
        return id_map[old_id]
    except KeyError:
        raise ReferentialIntegrityError(old_id, field=field_name) from None


def _resolve_optional(id_map: IdMap, old_id: Optional[str]) -> Optional[str]:
    if old_id is None:
        return None
    return id_map.get(old_id, old_id)


def remap_record(record: R, id_map: IdMap, project_id: str) -> R:
    """
    Rewrite one record's identifier and references through ``id_map``.

    Args:
        record: Source record (left untouched)
        id_map: Old -> new identifier substitutions
        project_id: Identifier of the new owning project

    Returns:
        A deep copy of the record with references rewritten

    Raises:
        ReferentialIntegrityError: If the record's own id or a strict
            reference has no mapping
    """
    changes: Dict[str, Any] = {}
    for field_name, kind in reference_fields(type(record)).items():
        value = getattr(record, field_name)
        if kind is RefKind.PROJECT:
            changes[field_name] = project_id
        elif kind in (RefKind.OWN_ID, RefKind.STRICT):
            changes[field_name] = _resolve_strict(id_map, value, field_name)
        elif kind is RefKind.OPTIONAL:
            changes[field_name] = _resolve_optional(id_map, value)
        elif kind is RefKind.LIST:
            changes[field_name] = [id_map.get(ref, ref) for ref in value]
    return record.model_copy(update=changes, deep=True)


def build_id_map(graph: ProjectGraph, id_factory: IdFactory) -> IdMap:
    """
    Allocate one fresh identifier per entity in the graph.

    Identifiers are unique across entity kinds, so a single flat map
    covers the project and every collection.
    """
    id_map: IdMap = {graph.project.id: id_factory()}
    for record in graph.iter_records():
        id_map[record.id] = id_factory()
    return id_map


def remap_project_ids(
    graph: ProjectGraph, id_factory: Optional[IdFactory] = None
) -> ProjectGraph:
    """
    Produce a copy of ``graph`` under a disjoint identifier space.

    The project title gets " (Copy)" appended. Collection membership and
    ordering are preserved. The input graph is never mutated.

    Args:
        graph: Gathered or imported project graph
        id_factory: Zero-argument callable returning a fresh identifier
            (default: random UUID4)

    Returns:
        The remapped graph

    Raises:
        ReferentialIntegrityError: If a strict reference points outside
            the graph
    """
    id_map = build_id_map(graph, id_factory or new_uuid)
    new_project_id = id_map[graph.project.id]

    project = remap_record(graph.project, id_map, new_project_id)
    updates: Dict[str, Any] = {
        "project": project.model_copy(
            update={"title": f"{graph.project.title}{COPY_SUFFIX}"}
        )
    }

    for name, records in graph.iter_collections():
        remapped: List[Record] = [
            remap_record(record, id_map, new_project_id) for record in records
        ]
        updates[name] = remapped

    if graph.project_dictionary is not None:
        updates["project_dictionary"] = remap_record(
            graph.project_dictionary, id_map, new_project_id
        )

    return graph.model_copy(update=updates)
