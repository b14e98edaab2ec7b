#!/usr/bin/env python3
"""
gather.py
--------------------
Assemble a project graph from the store.

All reads for one project go through a single session, one range query
per collection. The store is assumed quiescent while gathering: SQLite
does not give these reads snapshot isolation against a concurrent writer
on another connection, so a write landing mid-gather could produce a
graph whose strict references do not close.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, List, Optional

# --- Local imports ---
from writr.database.collections import CollectionSet
from .types import PROJECT_DICTIONARY_COLLECTION, ProjectGraph


def gather_project_graph(
    collections: CollectionSet, project_id: str
) -> Optional[ProjectGraph]:
    """
    Read every row belonging to one project.

    Args:
        collections: Managers bound to an open session
        project_id: Identifier of the project to gather

    Returns:
        The project graph, or None if the project does not exist
    """
    project = collections.projects.get(project_id)
    if project is None:
        return None

    data: Dict[str, Any] = {"project": project}
    for manager in collections.project_scoped():
        name = manager.config.name
        if name == PROJECT_DICTIONARY_COLLECTION:
            data["project_dictionary"] = manager.first_where_project(project_id)
        else:
            data[name] = manager.where_project(project_id)

    return ProjectGraph(**data)


def gather_all_project_graphs(collections: CollectionSet) -> List[ProjectGraph]:
    """Gather every project in the store."""
    graphs = []
    for project in collections.projects.list_all():
        graph = gather_project_graph(collections, project.id)
        if graph is not None:
            graphs.append(graph)
    return graphs
