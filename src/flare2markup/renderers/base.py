#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/flare2markup/renderers/base.py
"""Base class for target-format renderers.

A renderer owns a frozen rule table, the dispatcher that walks the document
tree with it, and a list generator configured with the format's layout and
continuation policy. The rule table is shared by every format; the rules call
format-specific hooks (``heading``, ``code_block``, ``admonition``, ...) that
subclasses implement.

Renderers keep no per-conversion state. Everything mutable lives in the
:class:`~flare2markup.converters.context.ConversionContext` created by
:meth:`BaseRenderer.convert`, so one renderer instance can serve concurrent
conversions.

"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Callable, ClassVar, Mapping, Optional, Sequence, Union, cast

from flare2markup.ast.nodes import DocumentNode, Element, Text, is_blank, is_element
from flare2markup.ast.tree import TreeIndex
from flare2markup.constants import (
    ADMONITION_CLASS_LABELS,
    ADMONITION_LABEL_SPAN_SUFFIXES,
    BLOCK_IMAGE_MIN_WIDTH,
    BLOCK_TAGS,
    COLLAPSIBLE_CLASSES,
    HEADING_TAGS,
    INLINE_IMAGE_CLASSES,
    LIST_TAGS,
    SKIPPED_TAGS,
)
from flare2markup.converters.context import ConversionContext
from flare2markup.converters.dispatcher import RuleDispatcher
from flare2markup.converters.result import ConversionMetadata, ConversionResult
from flare2markup.converters.rules import (
    PRIORITY_BLOCK,
    PRIORITY_CONTAINER,
    PRIORITY_INLINE,
    PRIORITY_SKIP,
    PRIORITY_STRUCTURE,
    PRIORITY_VENDOR,
    Handler,
    RuleTable,
    all_of,
    any_of,
    has_attribute,
    tag_is,
)
from flare2markup.exceptions import InvalidOptionsError, ValidationError
from flare2markup.lists.continuation import ContinuationPolicy
from flare2markup.lists.generator import ListGenerator
from flare2markup.lists.layouts import ListLayout
from flare2markup.options import ConversionOptions
from flare2markup.postprocess.images import classify_image_path
from flare2markup.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

_LANGUAGE_CLASS_RE = re.compile(r"^(?:language|lang)-(.+)$")
_BRUSH_RE = re.compile(r"brush:\s*([\w+#-]+)")
_CSS_DIMENSION_RE = re.compile(r"(width|height)\s*:\s*(\d+)(?:px)?", re.IGNORECASE)
_SPACE_RUN_RE = re.compile(r"[ \t]{2,}")
_BLANK_LINES_RE = re.compile(r"\n[ \t]*\n+")
_LEADING_LINE_SPACE_RE = re.compile(r"\n[ \t]+")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")

_CONTAINER_TAGS = frozenset(
    {
        "body",
        "html",
        "div",
        "section",
        "article",
        "main",
        "aside",
        "header",
        "footer",
        "nav",
        "figure",
        "fieldset",
        "address",
        "details",
        "madcap:dropdownbody",
        "madcap:snippetblock",
    }
)


@dataclass(frozen=True)
class ImageSpec:
    """Attributes of an image element gathered for rendering."""

    src: str
    alt: str = ""
    width: Optional[int] = None
    height: Optional[int] = None
    title: str = ""
    inline: bool = False
    icon: bool = False


@dataclass(frozen=True)
class TableCell:
    """One rendered table cell."""

    text: str
    header: bool = False
    block: bool = False
    colspan: int = 1


class BaseRenderer(ABC):
    """Abstract base class for target-format renderers.

    Parameters
    ----------
    options : ConversionOptions or None, default None
        Format-specific options; the format's default options when None

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not an instance of the format's options class

    """

    format_name: ClassVar[str] = ""
    options_class: ClassVar[type[ConversionOptions]] = ConversionOptions

    def __init__(self, options: ConversionOptions | None = None):
        """Initialize the renderer and freeze its rule table."""
        self._validate_options_type(options, self.options_class, self.format_name)
        self.options: ConversionOptions = options or self.options_class()

        table = RuleTable()
        self._register_common_rules(table)
        self.register_rules(table)
        self.rules = table.freeze()
        self.dispatcher = RuleDispatcher(self.rules, self.escape_text)
        self.list_generator = ListGenerator(self, self.create_list_layout(), self.create_continuation_policy())

    @staticmethod
    def _validate_options_type(options: ConversionOptions | None, expected_type: type, format_name: str) -> None:
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                format_name=format_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    # ------------------------------------------------------------------
    # Conversion entry points
    # ------------------------------------------------------------------

    def convert(
        self,
        root: Element,
        variables: Mapping[str, str] | None = None,
        snippets: Mapping[str, Element] | None = None,
        cross_references: Mapping[str, str] | None = None,
    ) -> ConversionResult:
        """Convert a document tree to target-format text.

        Parameters
        ----------
        root : Element
            Cleaned document tree (typically the ``body`` element)
        variables : Mapping[str, str], optional
            Resolved variable values keyed by ``Set.Name``
        snippets : Mapping[str, Element], optional
            Pre-loaded snippet trees keyed by snippet path
        cross_references : Mapping[str, str], optional
            Link target rewrites

        Returns
        -------
        ConversionResult
            Rendered content and metadata

        Raises
        ------
        ValidationError
            If ``root`` is not an Element

        """
        if not isinstance(root, Element):
            raise ValidationError(
                f"A document tree Element is required, got {type(root).__name__}",
                parameter_name="root",
                parameter_value=root,
            )

        context = ConversionContext(
            options=self.options,
            index=TreeIndex(root),
            variables=variables or {},
            snippets=snippets or {},
            cross_references=cross_references or {},
        )

        with debug_timer(logger, f"Rendering ({self.format_name})"):
            body = self.render_root(root, context)
            content = self.finalize(body)

        if self.options.apply_post_passes:
            from flare2markup.postprocess.pipeline import run_post_passes

            content = run_post_passes(content, self.format_name, self.options)

        metadata = ConversionMetadata(
            list_count=context.stats.list_count,
            max_depth=context.stats.max_depth,
            has_alphabetical=context.stats.has_alphabetical,
            has_mixed_content=context.stats.has_mixed_content,
            warnings=tuple(context.warnings),
        )
        return ConversionResult(content=content, metadata=metadata, target_format=self.format_name)

    def render_to_string(self, root: Element, **lookups: Mapping) -> str:
        """Convert ``root`` and return only the content."""
        return self.convert(root, **lookups).content

    def render(self, root: Element, output: Union[str, Path, IO[bytes], IO[str]], **lookups: Mapping) -> None:
        """Convert ``root`` and write the content to a path or stream."""
        self.write_text_output(self.render_to_string(root, **lookups), output)

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text to a file path or to a text/binary stream (UTF-8)."""
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
            return
        try:
            output.write(text)  # type: ignore[arg-type]
        except TypeError:
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]

    def render_root(self, root: Element, context: ConversionContext) -> str:
        """Render the document root as a sequence of blocks."""
        return self.render_blocks(root.children, context)

    def finalize(self, text: str) -> str:
        """Normalize whitespace in the assembled document."""
        lines = [line.rstrip() for line in text.split("\n")]
        result = _EXCESS_NEWLINES_RE.sub("\n\n", "\n".join(lines)).strip("\n")
        return result + "\n" if result else ""

    # ------------------------------------------------------------------
    # Rendering helpers used by rules and by the list generator
    # ------------------------------------------------------------------

    def render_node(self, node: DocumentNode, context: ConversionContext) -> str:
        return self.dispatcher.render(node, context)

    def render_inline(self, nodes: Sequence[DocumentNode], context: ConversionContext) -> str:
        """Render nodes as a single run of inline text with no blank lines."""
        text = self.dispatcher.render_all(nodes, context)
        text = _BLANK_LINES_RE.sub("\n", text)
        text = _LEADING_LINE_SPACE_RE.sub("\n", text)
        text = _SPACE_RUN_RE.sub(" ", text)
        return text.strip()

    def is_block(self, node: DocumentNode) -> bool:
        """Return True if ``node`` renders as a block rather than inline text."""
        if not isinstance(node, Element):
            return False
        return node.tag in BLOCK_TAGS or self._is_admonition(node) or self._is_collapsible(node)

    def render_block(self, node: DocumentNode, context: ConversionContext) -> str:
        """Render one node as a block."""
        if self.is_block(node):
            return self.dispatcher.render(node, context).strip("\n")
        return self.render_paragraph([node], context)

    def render_paragraph(self, nodes: Sequence[DocumentNode], context: ConversionContext) -> str:
        """Render an inline run as a paragraph (empty string when it has no text)."""
        text = self.render_inline(nodes, context)
        return self.paragraph(self.escape_line_start(text)) if text else ""

    def render_blocks(self, nodes: Sequence[DocumentNode], context: ConversionContext) -> str:
        """Render a mixed sequence of nodes as blocks separated by blank lines.

        Consecutive inline nodes are grouped into paragraphs.
        """
        pieces: list[str] = []
        run: list[DocumentNode] = []

        def flush() -> None:
            if run:
                paragraph = self.render_paragraph(run, context)
                if paragraph:
                    pieces.append(paragraph)
                run.clear()

        for node in nodes:
            if self.is_block(node):
                flush()
                text = self.dispatcher.render(node, context).strip("\n")
                if text.strip():
                    pieces.append(text)
            else:
                run.append(node)
        flush()
        return "\n\n".join(pieces)

    # ------------------------------------------------------------------
    # Rule table
    # ------------------------------------------------------------------

    def _register_common_rules(self, table: RuleTable) -> None:
        table.add(
            "skip",
            PRIORITY_SKIP,
            any_of(tag_is(*SKIPPED_TAGS), has_attribute("hidden")),
            lambda element, context: "",
        )

        table.add(
            "variable",
            PRIORITY_VENDOR,
            any_of(has_attribute("data-variable"), tag_is("madcap:variable")),
            self._render_variable,
        )
        table.add(
            "snippet",
            PRIORITY_VENDOR,
            any_of(has_attribute("data-snippet"), tag_is("madcap:snippetblock", "madcap:snippettext")),
            self._render_snippet,
        )
        table.add(
            "admonition-label",
            PRIORITY_VENDOR,
            all_of(tag_is("span"), self._has_admonition_label_class),
            lambda element, context: "",
        )
        table.add("admonition", PRIORITY_VENDOR, self._is_admonition, self._render_admonition)
        table.add("collapsible", PRIORITY_VENDOR, self._is_collapsible, self._render_collapsible)

        table.add("list", PRIORITY_STRUCTURE, tag_is(*LIST_TAGS), self.list_generator_handler)
        table.add("table", PRIORITY_STRUCTURE, tag_is("table"), self._render_table)
        table.add("code-block", PRIORITY_STRUCTURE, tag_is("pre"), self._render_code_block)

        table.add("heading", PRIORITY_BLOCK, tag_is(*HEADING_TAGS), self._render_heading)
        table.add("paragraph", PRIORITY_BLOCK, tag_is("p"), self._render_paragraph_element)
        table.add("block-quote", PRIORITY_BLOCK, tag_is("blockquote"), self._render_block_quote)
        table.add("thematic-break", PRIORITY_BLOCK, tag_is("hr"), lambda element, context: self.thematic_break())
        table.add("image", PRIORITY_BLOCK, tag_is("img"), self._render_image)

        table.add("strong", PRIORITY_INLINE, tag_is("b", "strong"), self._inline(self.strong))
        table.add("emphasis", PRIORITY_INLINE, tag_is("i", "em", "cite"), self._inline(self.emphasis))
        table.add("inline-code", PRIORITY_INLINE, tag_is("code", "kbd", "tt", "samp", "var"), self._render_inline_code)
        table.add("link", PRIORITY_INLINE, tag_is("a", "madcap:xref"), self._render_link)
        table.add("line-break", PRIORITY_INLINE, tag_is("br"), lambda element, context: self.line_break())
        table.add("superscript", PRIORITY_INLINE, tag_is("sup"), self._inline(self.superscript))
        table.add("subscript", PRIORITY_INLINE, tag_is("sub"), self._inline(self.subscript))

        table.add("container", PRIORITY_CONTAINER, self._is_container, self._render_container)

    def register_rules(self, table: RuleTable) -> None:
        """Hook for format-specific rules, registered after the common ones."""

    def list_generator_handler(self, element: Element, context: ConversionContext) -> str:
        return self.list_generator.render_list(element, context)

    def _inline(self, wrap: Callable[[str], str]) -> Handler:
        def handler(element: Element, context: ConversionContext) -> str:
            text = self.render_inline(element.children, context)
            return wrap(text) if text else ""

        return handler

    # Predicates

    @staticmethod
    def _has_admonition_label_class(element: Element) -> bool:
        return any(cls.lower().endswith(ADMONITION_LABEL_SPAN_SUFFIXES) for cls in element.classes)

    @staticmethod
    def _admonition_label(element: Element) -> str | None:
        if element.tag not in ("div", "p", "aside", "section"):
            return None
        for cls in element.classes:
            name = cls.lower()
            if name.startswith("mc-"):
                name = name[3:]
            if name in ADMONITION_CLASS_LABELS:
                return ADMONITION_CLASS_LABELS[name]
        for child in element.element_children():
            if child.tag != "span":
                continue
            for cls in child.classes:
                name = cls.lower()
                for suffix in ADMONITION_LABEL_SPAN_SUFFIXES:
                    if name.endswith(suffix) and name[: -len(suffix)] in ADMONITION_CLASS_LABELS:
                        return ADMONITION_CLASS_LABELS[name[: -len(suffix)]]
        return None

    def _is_admonition(self, element: Element) -> bool:
        return self._admonition_label(element) is not None

    @staticmethod
    def _is_collapsible(element: Element) -> bool:
        if element.tag in ("details", "madcap:dropdown"):
            return True
        if "data-madcap-dropdown" in element.attributes:
            return True
        return element.tag in ("div", "section") and element.has_class(*COLLAPSIBLE_CLASSES)

    def _is_container(self, element: Element) -> bool:
        if element.tag in _CONTAINER_TAGS:
            return True
        return any(self.is_block(child) for child in element.children)

    # Vendor constructs

    def _render_variable(self, element: Element, context: ConversionContext) -> str:
        name = element.get("data-variable") or element.get("name") or ""
        value = context.variables.get(name)
        if value is not None:
            return self.escape_text(value)
        fallback = self.render_inline(element.children, context)
        context.warn(f"Unresolved variable {name!r}; using its inline text")
        return fallback

    def _render_snippet(self, element: Element, context: ConversionContext) -> str:
        path = element.get("data-snippet") or element.get("src") or ""
        inline = element.tag == "madcap:snippettext" or not self.is_block(element)
        snippet = context.snippets.get(path)
        if snippet is None:
            context.warn(f"Snippet {path!r} was not loaded; rendering the reference content")
            nodes = element.children
        else:
            nodes = snippet.children

        with context.snippet(path) as fresh:
            if not fresh:
                context.warn(f"Snippet {path!r} includes itself; skipping the nested reference")
                return ""
            if snippet is not None:
                context.index.add_subtree(snippet, parent=element)
            if inline:
                return self.render_inline(nodes, context)
            return self.render_blocks(nodes, context)

    def _render_admonition(self, element: Element, context: ConversionContext) -> str:
        label = self._admonition_label(element) or "NOTE"
        with context.admonition():
            if element.tag == "p":
                body = self.render_inline(element.children, context)
            else:
                body = self.render_blocks(element.children, context)
        if not body.strip():
            return ""
        return self.admonition(label, body.strip())

    def _render_collapsible(self, element: Element, context: ConversionContext) -> str:
        title, body_nodes = self._split_collapsible(element)
        title_text = self.render_inline(title.children, context) if title is not None else ""
        if not title_text:
            title_text = self.escape_text(element.get("data-madcap-dropdown") or element.get("title") or "Details")
        body = self.render_blocks(body_nodes, context)
        return self.collapsible(title_text, body.strip())

    @staticmethod
    def _split_collapsible(element: Element) -> tuple[Element | None, list[DocumentNode]]:
        title: Element | None = None
        body: list[DocumentNode] = []
        for child in element.children:
            if title is None and is_element(child, "summary", "madcap:dropdownhead"):
                title = cast(Element, child)
            elif is_element(child, "madcap:dropdownbody"):
                body.extend(cast(Element, child).children)
            else:
                body.append(child)
        if title is None:
            for position, child in enumerate(body):
                if is_blank(child):
                    continue
                if is_element(child, *HEADING_TAGS):
                    title = cast(Element, child)
                    del body[position]
                break
        return title, body

    # Structure

    def _render_heading(self, element: Element, context: ConversionContext) -> str:
        text = self.render_inline(element.children, context)
        if not text:
            return ""
        return self.heading(int(element.tag[1]), text)

    def _render_paragraph_element(self, element: Element, context: ConversionContext) -> str:
        if any(self.is_block(child) for child in element.children):
            return self.render_blocks(element.children, context)
        return self.render_paragraph(element.children, context)

    def _render_block_quote(self, element: Element, context: ConversionContext) -> str:
        body = self.render_blocks(element.children, context)
        return self.block_quote(body) if body.strip() else ""

    def _render_code_block(self, element: Element, context: ConversionContext) -> str:
        code = element.text_content(collapse=False).strip("\n")
        return self.code_block(code, self._code_language(element))

    @staticmethod
    def _code_language(element: Element) -> str:
        candidates = [element, *element.iter_elements("code")]
        for candidate in candidates:
            brush = _BRUSH_RE.search(candidate.get("class") or "")
            if brush:
                return brush.group(1)
            for cls in candidate.classes:
                match = _LANGUAGE_CLASS_RE.match(cls)
                if match:
                    return match.group(1)
            if candidate.get("data-language"):
                return candidate.get("data-language") or ""
        return ""

    def _render_table(self, element: Element, context: ConversionContext) -> str:
        rows: list[list[TableCell]] = []
        header_rows = 0
        with context.table():
            for row in element.iter_elements("tr"):
                owner = next((a for a in context.index.ancestors(row) if a.tag == "table"), None)
                if owner is not element:
                    # Rows of nested tables render with their own table
                    continue
                cells = []
                for cell in row.element_children():
                    if cell.tag not in ("td", "th"):
                        continue
                    block = any(self.is_block(child) for child in cell.children)
                    text = (
                        self.render_blocks(cell.children, context)
                        if block
                        else self.render_inline(cell.children, context)
                    )
                    colspan = _parse_int(cell.get("colspan")) or 1
                    cells.append(TableCell(text=text, header=cell.tag == "th", block=block, colspan=colspan))
                if not cells:
                    continue
                in_head = any(ancestor.tag == "thead" for ancestor in context.index.ancestors(row))
                if len(rows) == header_rows and (in_head or all(cell.header for cell in cells)):
                    header_rows += 1
                rows.append(cells)
        if not rows:
            return ""
        caption = element.find("caption")
        title = self.render_inline(caption.children, context) if caption is not None else ""
        return self.table(rows, header_rows, title)

    def _render_image(self, element: Element, context: ConversionContext) -> str:
        src = element.get("src") or ""
        if not src:
            return ""
        spec = self._classify_image(element, context)
        return self.image(spec)

    def _classify_image(self, element: Element, context: ConversionContext) -> ImageSpec:
        width = _parse_int(element.get("width"))
        height = _parse_int(element.get("height"))
        for name, value in _CSS_DIMENSION_RE.findall(element.get("style") or ""):
            if name.lower() == "width" and width is None:
                width = int(value)
            elif name.lower() == "height" and height is None:
                height = int(value)

        src = element.get("src") or ""
        threshold = self.options.inline_image_threshold
        by_path = classify_image_path(src)

        # Same signal order as the image pass: explicit class, path, dimensions, context
        icon = False
        if element.has_class(*INLINE_IMAGE_CLASSES):
            icon = inline = True
        elif by_path is not None:
            icon = inline = by_path
        elif width is not None and height is not None and width <= threshold and height <= threshold:
            icon = inline = True
        elif width is not None and width > BLOCK_IMAGE_MIN_WIDTH:
            inline = False
        else:
            inline = self._has_inline_siblings(element, context)

        return ImageSpec(
            src=self.rewrite_target(src, context),
            alt=element.get("alt") or "",
            width=width,
            height=height,
            title=element.get("title") or "",
            inline=inline,
            icon=icon,
        )

    @staticmethod
    def _has_inline_siblings(element: Element, context: ConversionContext) -> bool:
        parent = context.index.parent(element)
        if parent is None:
            return False
        if parent.tag not in BLOCK_TAGS:
            # Inside a link or span: the image is part of running text
            return True
        # Only the run of inline siblings the image sits in counts as its context
        run: list[DocumentNode] = []
        found = False
        for sibling in parent.children:
            if isinstance(sibling, Element) and sibling.tag in BLOCK_TAGS:
                if found:
                    break
                run.clear()
                continue
            if sibling is element:
                found = True
                continue
            run.append(sibling)
        for sibling in run:
            if is_blank(sibling):
                continue
            if isinstance(sibling, Text) or (isinstance(sibling, Element) and sibling.tag not in ("img", "br")):
                return True
        return False

    def _render_inline_code(self, element: Element, context: ConversionContext) -> str:
        with context.code_block():
            text = self.dispatcher.render_all(element.children, context)
        text = " ".join(text.split())
        return self.inline_code(text) if text else ""

    def _render_link(self, element: Element, context: ConversionContext) -> str:
        text = self.render_inline(element.children, context)
        href = element.get("href")
        if not href:
            return text
        target = self.rewrite_target(href, context)
        return self.link(target, text or self.escape_text(target), rewritten=target != href)

    def _render_container(self, element: Element, context: ConversionContext) -> str:
        return self.render_blocks(element.children, context)

    @staticmethod
    def rewrite_target(href: str, context: ConversionContext) -> str:
        """Rewrite a link or image target through the cross-reference map.

        The full target is looked up first, then the path without its fragment
        (which is carried over to the rewritten path).
        """
        mapping = context.cross_references
        if not mapping:
            return href
        if href in mapping:
            return mapping[href]
        path, sep, fragment = href.partition("#")
        if path and path in mapping:
            return mapping[path] + sep + fragment
        return href

    # ------------------------------------------------------------------
    # Format hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def escape_text(self, text: str) -> str:
        """Escape target-format control characters in document text."""

    def escape_line_start(self, text: str) -> str:
        """Escape block prefixes at the start of each paragraph line (none by default)."""
        return text

    @abstractmethod
    def create_list_layout(self) -> ListLayout:
        """Return the format's list layout."""

    @abstractmethod
    def create_continuation_policy(self) -> ContinuationPolicy:
        """Return the continuation policy for this conversion's options."""

    def paragraph(self, text: str) -> str:
        return text

    @abstractmethod
    def heading(self, level: int, text: str) -> str: ...

    @abstractmethod
    def code_block(self, code: str, language: str) -> str: ...

    @abstractmethod
    def block_quote(self, body: str) -> str: ...

    @abstractmethod
    def thematic_break(self) -> str: ...

    @abstractmethod
    def table(self, rows: list[list[TableCell]], header_rows: int, title: str) -> str: ...

    @abstractmethod
    def image(self, spec: ImageSpec) -> str: ...

    @abstractmethod
    def admonition(self, label: str, body: str) -> str: ...

    @abstractmethod
    def collapsible(self, title: str, body: str) -> str: ...

    @abstractmethod
    def strong(self, text: str) -> str: ...

    @abstractmethod
    def emphasis(self, text: str) -> str: ...

    @abstractmethod
    def inline_code(self, text: str) -> str: ...

    @abstractmethod
    def link(self, href: str, text: str, rewritten: bool = False) -> str: ...

    @abstractmethod
    def line_break(self) -> str: ...

    @abstractmethod
    def superscript(self, text: str) -> str: ...

    @abstractmethod
    def subscript(self, text: str) -> str: ...


def _parse_int(value: str | None) -> int | None:
    if not value:
        return None
    match = re.match(r"\s*(\d+)", value)
    return int(match.group(1)) if match else None
