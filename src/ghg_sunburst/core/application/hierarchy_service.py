"""
Service for loading proportion hierarchies.

Accepted document shapes:

- a JSON list of nodes
- an object with a ``nodes`` list
- an object with a ``rows`` list of ``[sector, subsector, subsubsector, share]``

Objects may also declare a ``share_basis`` ("parent" or "absolute").
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ghg_sunburst.core.data.ghg_emissions import GHG_EMISSIONS_ROWS, SHARE_BASIS
from ghg_sunburst.core.domain.models import ProportionNode, ShareBasis
from ghg_sunburst.core.application.label_strategy import OVERRIDE_CHOICES

logger = logging.getLogger(__name__)

class HierarchyLoadError(Exception):
    """Raised when a hierarchy document cannot be turned into nodes."""

@dataclass
class Hierarchy:
    nodes: List[ProportionNode] = field(default_factory=list)
    share_basis: Optional[ShareBasis] = None
    source: str = ""

    def node_count(self) -> int:
        def count(nodes):
            return sum(1 + count(node.children) for node in nodes)
        return count(self.nodes)

    def max_depth(self) -> int:
        def depth(nodes):
            return max((1 + depth(node.children) for node in nodes), default=0)
        return depth(self.nodes)

def create_node_id(name: str) -> str:
    """"Agriculture, Forestry & Land Use" -> "agriculture-forestry-land-use"."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")

class HierarchyService:
    """Service for reading hierarchies and label overrides."""

    def load_from_file(self, path) -> Hierarchy:
        """
        Loads a hierarchy from a JSON file.

        Raises:
            HierarchyLoadError: If the file is missing, unreadable or malformed
        """
        file_path = Path(path)
        if not file_path.exists():
            raise HierarchyLoadError(f"Input file not found: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            raise HierarchyLoadError(f"Invalid JSON in {file_path}: {e}")
        except OSError as e:
            raise HierarchyLoadError(f"Could not read {file_path}: {e}")

        hierarchy = self.load_from_document(document)
        hierarchy.source = str(file_path)
        logger.debug("Loaded %d node(s) from %s", hierarchy.node_count(), file_path)
        return hierarchy

    def load_from_document(self, document: Any) -> Hierarchy:
        share_basis = None
        if isinstance(document, dict):
            share_basis = self._parse_share_basis(document.get("share_basis"))
            if "rows" in document:
                nodes = self.nodes_from_rows(document["rows"])
            elif "nodes" in document:
                nodes = self._nodes_from_list(document["nodes"])
            else:
                raise HierarchyLoadError("Expected a 'nodes' or 'rows' key in the document")
        elif isinstance(document, list):
            nodes = self._nodes_from_list(document)
        else:
            raise HierarchyLoadError(
                f"Expected a list or an object, got {type(document).__name__}"
            )

        return Hierarchy(nodes=nodes, share_basis=share_basis)

    def load_sample(self) -> Hierarchy:
        """Global greenhouse gas emissions by sector."""
        return Hierarchy(
            nodes=self.nodes_from_rows(GHG_EMISSIONS_ROWS),
            share_basis=SHARE_BASIS,
            source="sample:ghg-emissions",
        )

    def _parse_share_basis(self, value) -> Optional[ShareBasis]:
        if value is None:
            return None
        try:
            return ShareBasis(value)
        except ValueError:
            choices = ", ".join(b.value for b in ShareBasis)
            raise HierarchyLoadError(f"Unsupported share_basis {value!r}. Supported: {choices}")

    def _nodes_from_list(self, items) -> List[ProportionNode]:
        if not isinstance(items, list):
            raise HierarchyLoadError("'nodes' must be a list")
        try:
            return [ProportionNode.from_dict(item) for item in items]
        except ValueError as e:
            raise HierarchyLoadError(str(e))

    def nodes_from_rows(self, rows: Sequence[Sequence[Any]]) -> List[ProportionNode]:
        """
        Builds a forest from flat rows.

        A row with only a sector name defines a depth-1 node, one with a
        subsector defines a depth-2 node, and so on. Parents must appear
        before their children; rows keep their order within each parent.
        """
        if not isinstance(rows, (list, tuple)):
            raise HierarchyLoadError("'rows' must be a list")

        # path tuple -> [name, share, child paths]
        entries: Dict[Tuple[str, ...], list] = {}
        roots: List[Tuple[str, ...]] = []

        for index, row in enumerate(rows, start=1):
            if not isinstance(row, (list, tuple)) or len(row) != 4:
                raise HierarchyLoadError(
                    f"Row {index} must be [sector, subsector, subsubsector, share]"
                )

            names = [str(part).strip() if part is not None else "" for part in row[:3]]
            share = row[3]
            try:
                share = float(share)
            except (TypeError, ValueError):
                raise HierarchyLoadError(f"Row {index} has an invalid share {share!r}")

            if not names[0]:
                raise HierarchyLoadError(f"Row {index} has no sector name")
            if not names[1] and names[2]:
                raise HierarchyLoadError(f"Row {index} has a subsubsector without a subsector")

            path = tuple(name for name in names if name)
            if path in entries:
                raise HierarchyLoadError(f"Row {index} duplicates {' / '.join(path)}")

            parent_path = path[:-1]
            if parent_path and parent_path not in entries:
                raise HierarchyLoadError(
                    f"Row {index} appears before its parent {' / '.join(parent_path)}"
                )

            entries[path] = [path[-1], share, []]
            if parent_path:
                entries[parent_path][2].append(path)
            else:
                roots.append(path)

        taken: set = set()
        return [self._build_from_entries(path, entries, taken) for path in roots]

    def _build_from_entries(self, path, entries, taken, parent_id: str = "") -> ProportionNode:
        name, share, child_paths = entries[path]
        node_id = self._unique_id(create_node_id(name) or "node", parent_id, taken)
        return ProportionNode(
            id=node_id,
            name=name,
            share=share,
            children=tuple(
                self._build_from_entries(p, entries, taken, node_id) for p in child_paths
            ),
        )

    def _unique_id(self, node_id: str, parent_id: str, taken: set) -> str:
        """"Other" under Industry becomes "industry-other" once "other" is taken."""
        if node_id in taken and parent_id:
            node_id = f"{parent_id}-{node_id}"

        candidate, suffix = node_id, 2
        while candidate in taken:
            candidate = f"{node_id}-{suffix}"
            suffix += 1

        taken.add(candidate)
        return candidate

    def load_overrides(self, path) -> Dict[str, str]:
        """
        Loads label overrides: a JSON object of node id to "curved" or "radial".

        Raises:
            HierarchyLoadError: If the file is missing or an entry is invalid
        """
        file_path = Path(path)
        if not file_path.exists():
            raise HierarchyLoadError(f"Overrides file not found: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise HierarchyLoadError(f"Invalid JSON in {file_path}: {e}")

        return self.validate_overrides(data)

    def validate_overrides(self, data: Any) -> Dict[str, str]:
        if not isinstance(data, dict):
            raise HierarchyLoadError("Label overrides must be a JSON object")

        overrides = {}
        for node_id, choice in data.items():
            if choice not in OVERRIDE_CHOICES:
                raise HierarchyLoadError(
                    f"Invalid override {choice!r} for {node_id}. "
                    f"Supported: {', '.join(OVERRIDE_CHOICES)}"
                )
            overrides[str(node_id)] = choice
        return overrides
