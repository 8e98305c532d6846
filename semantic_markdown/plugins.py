"""semantic_markdown.plugins - contracts for the conversion extension hooks.

Usage::

    from semantic_markdown import ConversionOptions, convert_html_to_markdown
    from semantic_markdown.nodes import CustomNode

    def keep_iframes(element, options, indent_level):
        if element.name == "iframe":
            return [CustomNode(content=element.get("src"))]
        return None

    def render_iframe(node, options, indent_level):
        return f"[embedded: {node.content}]"

    markdown = convert_html_to_markdown(
        html,
        ConversionOptions(
            process_unhandled_element=keep_iframes,
            render_custom_node=render_iframe,
        ),
    )

Hooks are plain callables stored on :class:`~semantic_markdown.options.ConversionOptions`.
The ``runtime_checkable`` ``Protocol`` contracts below describe their
signatures so ``isinstance()`` checks work in tests without inheriting from a
base class.  Exceptions raised inside a hook propagate out of the conversion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .nodes import Node
    from .options import ConversionOptions

# ---------------------------------------------------------------------------
# Protocol definitions
# ---------------------------------------------------------------------------

@runtime_checkable
class ElementProcessor(Protocol):
    """Lowers one DOM node into AST nodes.

    Used both as ``override_element_processing`` (consulted before the
    built-in rules, for every child node including text) and as
    ``process_unhandled_element`` (consulted for elements no built-in rule
    recognises).  Returning None or an empty list defers to the next stage.
    """

    def __call__(
        self, element: Any, options: ConversionOptions, indent_level: int,
    ) -> list[Node] | None:
        ...


@runtime_checkable
class NodeRenderer(Protocol):
    """Renders one AST node ahead of the built-in renderer.

    Any string, including the empty string, is appended verbatim and replaces
    the built-in rendering.  None defers to the built-in rules.
    """

    def __call__(
        self, node: Node, options: ConversionOptions, indent_level: int,
    ) -> str | None:
        ...


@runtime_checkable
class CustomNodeRenderer(Protocol):
    """Renders :class:`~semantic_markdown.nodes.CustomNode` payloads."""

    def __call__(
        self, node: Node, options: ConversionOptions, indent_level: int,
    ) -> str | None:
        ...
