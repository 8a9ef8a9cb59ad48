"""Metadata formatters for the specmeta CLI."""

from typing import Any, Dict, Iterable, Optional

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from ...metadata.types import COMPUTED_KEYS, RESERVED_KEYS
from ...outline import OutlineNode


def user_tags(metadata: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in metadata.items() if k not in COMPUTED_KEYS}


class RichMetadataFormatter:
    """Formats metadata records using Rich.

    Groups and examples are rendered as a tree labelled with their full
    description, location and tags. Records carrying the highlighted tag
    are emphasized.
    """

    def __init__(self, highlight_tag: Optional[str] = None):
        """Initialize the formatter.

        Args:
            highlight_tag: Tag name whose records should stand out
        """
        self.highlight_tag = highlight_tag

    def format_tags(self, metadata: Dict[str, Any]) -> str:
        tags = user_tags(metadata)
        return ", ".join(f"{name}={value!r}" for name, value in tags.items())

    def format_label(self, metadata: Dict[str, Any], kind: str) -> str:
        """Format one record as a tree label.

        Args:
            metadata: Group or example record
            kind: "group" or "example"

        Returns:
            Rich markup for the label
        """
        style = "bold" if kind == "group" else ""
        if self.highlight_tag and metadata.get(self.highlight_tag):
            style = "bold yellow"

        text = escape(metadata["full_description"] or "(no description)")
        label = f"[{style}]{text}[/{style}]" if style else text
        label += f" [dim]{escape(metadata['location'])}[/dim]"

        tags = self.format_tags(metadata)
        if tags:
            label += f" [cyan]{{{escape(tags)}}}[/cyan]"
        return label

    def format_tree(self, nodes: Iterable[OutlineNode], title: str = "Outline") -> Tree:
        tree = Tree(title)
        for node in nodes:
            self._add_node(tree, node)
        return tree

    def _add_node(self, parent: Tree, node: OutlineNode) -> None:
        branch = parent.add(self.format_label(node.metadata, "group"))
        for example in node.examples:
            branch.add(self.format_label(example, "example"))
        for child in node.children:
            self._add_node(branch, child)

    def format_reserved_keys(self) -> Table:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Reserved key")
        table.add_column("Set on")

        for key in RESERVED_KEYS:
            if key in ('execution_result', 'example_group'):
                scope = "examples"
            else:
                scope = "groups and examples"
            table.add_row(key, scope)
        return table
