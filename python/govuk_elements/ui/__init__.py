from .core import Element, Raw, el, fragment, render_node, text_content, walk

__all__ = [
    "Element",
    "Raw",
    "el",
    "fragment",
    "render_node",
    "text_content",
    "walk",
]
