"""
XML builders for PANClient.

This module provides the two value types every request is made of:

- ``AddressPath``: an immutable XPath into the configuration tree.
- ``ConfigFragment``: an ordered sequence of XML elements sent as the
  ``element`` parameter of a config request.

``FragmentBuilder`` is a fluent builder for fragments, so no operation ever
assembles XML by string concatenation.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from lxml import etree

from ..exceptions import ProtocolError

# Initialize logger
logger = logging.getLogger("panclient")

_FRAGMENT_WRAPPER = "fragment"


def xpath_literal(value: str) -> str:
    """
    Quote a value for use inside an XPath predicate.

    Args:
        value: Raw value

    Returns:
        XPath string literal; concat() is used when both quote kinds appear
    """
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


class AddressPath:
    """
    An XPath into the configuration tree.

    Instances are immutable; every navigation method returns a new path.
    """

    __slots__ = ("_path",)

    def __init__(self, path: str):
        if not path.startswith("/"):
            raise ValueError(f"XPath must be absolute: {path}")
        object.__setattr__(self, "_path", path)

    def __setattr__(self, name, value):
        raise AttributeError("AddressPath is immutable")

    @property
    def xpath(self) -> str:
        return self._path

    def child(self, *tags: str) -> "AddressPath":
        """
        Descend into one or more child elements.

        Args:
            *tags: Element tags, outermost first

        Returns:
            AddressPath: The extended path
        """
        path = self._path
        for tag in tags:
            path = f"{path}/{tag.strip('/')}"
        return AddressPath(path)

    def entry(self, name: str) -> "AddressPath":
        """Select the ``entry`` child with the given name attribute."""
        return AddressPath(f"{self._path}/entry[@name={xpath_literal(name)}]")

    def member(self, value: str) -> "AddressPath":
        """Select the ``member`` child with the given text."""
        return AddressPath(f"{self._path}/member[text()={xpath_literal(value)}]")

    def __str__(self):
        return self._path

    def __repr__(self):
        return f"AddressPath({self._path!r})"

    def __eq__(self, other):
        if isinstance(other, AddressPath):
            return self._path == other._path
        return NotImplemented

    def __hash__(self):
        return hash(self._path)


class FragmentNode:
    """
    One element of a configuration fragment.

    Empty text is normalised to None so that an element written as
    ``<description/>`` and one written as ``<description></description>``
    compare equal.
    """

    __slots__ = ("tag", "attributes", "text", "children")

    def __init__(
        self,
        tag: str,
        attributes: Optional[Dict[str, str]] = None,
        text: Optional[str] = None,
        children: Iterable["FragmentNode"] = (),
    ):
        self.tag = tag
        self.attributes = dict(attributes or {})
        self.text = text if text else None
        self.children: Tuple[FragmentNode, ...] = tuple(children)

    def find(self, tag: str) -> Optional["FragmentNode"]:
        """Return the first direct child with the given tag."""
        for child in self.children:
            if child.tag == tag:
                return child
        return None

    def find_all(self, tag: str) -> List["FragmentNode"]:
        return [child for child in self.children if child.tag == tag]

    def to_element(self) -> etree._Element:
        element = etree.Element(self.tag)
        for name, value in self.attributes.items():
            element.set(name, value)
        if self.text is not None:
            element.text = self.text
        for child in self.children:
            element.append(child.to_element())
        return element

    @classmethod
    def from_element(cls, element: etree._Element) -> "FragmentNode":
        children = [cls.from_element(child) for child in element if isinstance(child.tag, str)]
        text = element.text
        if children and text is not None and not text.strip():
            text = None
        return cls(element.tag, dict(element.attrib), text, children)

    def __eq__(self, other):
        if not isinstance(other, FragmentNode):
            return NotImplemented
        return (
            self.tag == other.tag
            and self.attributes == other.attributes
            and self.text == other.text
            and self.children == other.children
        )

    def __hash__(self):
        return hash((self.tag, tuple(sorted(self.attributes.items())), self.text, self.children))

    def __repr__(self):
        return f"FragmentNode({self.tag!r}, attributes={self.attributes!r}, text={self.text!r}, children={len(self.children)})"


class ConfigFragment:
    """
    An ordered sequence of sibling elements.

    Two fragments are equal when their element trees are structurally equal
    (same tags, attributes, text and child order).
    """

    __slots__ = ("nodes",)

    def __init__(self, nodes: Iterable[FragmentNode] = ()):
        self.nodes: Tuple[FragmentNode, ...] = tuple(nodes)

    def __iter__(self) -> Iterator[FragmentNode]:
        return iter(self.nodes)

    def __len__(self):
        return len(self.nodes)

    def __bool__(self):
        return bool(self.nodes)

    def find(self, tag: str) -> Optional[FragmentNode]:
        """Return the first top-level node with the given tag."""
        for node in self.nodes:
            if node.tag == tag:
                return node
        return None

    def to_xml(self) -> str:
        """
        Encode the fragment as the text sent in the ``element`` parameter.

        Returns:
            Concatenated XML of every node, without declaration or indentation
        """
        return "".join(
            etree.tostring(node.to_element(), encoding="unicode") for node in self.nodes
        )

    @classmethod
    def from_xml(cls, xml_text: str) -> "ConfigFragment":
        """
        Decode XML text holding zero or more sibling elements.

        Args:
            xml_text: Fragment text as produced by ``to_xml``

        Returns:
            ConfigFragment: The decoded fragment

        Raises:
            ProtocolError: If the text is not well-formed XML
        """
        try:
            wrapper = etree.fromstring(f"<{_FRAGMENT_WRAPPER}>{xml_text}</{_FRAGMENT_WRAPPER}>")
        except etree.XMLSyntaxError as e:
            error_msg = f"Malformed configuration fragment: {e}"
            logger.error(error_msg)
            raise ProtocolError(error_msg) from e
        return cls(FragmentNode.from_element(child) for child in wrapper if isinstance(child.tag, str))

    @classmethod
    def from_element(cls, element: etree._Element) -> "ConfigFragment":
        """Build a fragment from the children of an lxml element."""
        return cls(FragmentNode.from_element(child) for child in element if isinstance(child.tag, str))

    def __eq__(self, other):
        if not isinstance(other, ConfigFragment):
            return NotImplemented
        return self.nodes == other.nodes

    def __hash__(self):
        return hash(self.nodes)

    def __repr__(self):
        return f"ConfigFragment({self.to_xml()!r})"


class _Draft:
    """Mutable node used while a FragmentBuilder is open."""

    __slots__ = ("tag", "attributes", "text", "children")

    def __init__(self, tag, attributes, text):
        self.tag = tag
        self.attributes = dict(attributes or {})
        self.text = text
        self.children: List[_Draft] = []

    def freeze(self) -> FragmentNode:
        return FragmentNode(self.tag, self.attributes, self.text, [c.freeze() for c in self.children])


class FragmentBuilder:
    """
    Fluent builder for configuration fragments.

    Example:
        fragment = (
            FragmentBuilder()
            .into("static").members(["web1", "web2"]).up()
            .add("description", text="web servers")
            .build()
        )
    """

    def __init__(self):
        self._top: List[_Draft] = []
        self._stack: List[_Draft] = []

    def _siblings(self) -> List[_Draft]:
        return self._stack[-1].children if self._stack else self._top

    def add(self, tag: str, attributes: Optional[Dict[str, str]] = None, text: Optional[str] = None) -> "FragmentBuilder":
        """
        Add an element at the current level and stay at this level.

        Args:
            tag: Element tag name
            attributes: Optional element attributes
            text: Optional element text

        Returns:
            FragmentBuilder: Self for method chaining
        """
        self._siblings().append(_Draft(tag, attributes, text))
        return self

    def add_if(self, tag: str, text: Optional[str]) -> "FragmentBuilder":
        """Add a text element only when ``text`` is non-empty."""
        if text:
            self.add(tag, text=text)
        return self

    def into(self, tag: str, attributes: Optional[Dict[str, str]] = None, text: Optional[str] = None) -> "FragmentBuilder":
        """
        Add an element at the current level and make it the current level.

        Args:
            tag: Element tag name
            attributes: Optional element attributes
            text: Optional element text

        Returns:
            FragmentBuilder: Self for method chaining
        """
        draft = _Draft(tag, attributes, text)
        self._siblings().append(draft)
        self._stack.append(draft)
        return self

    def entry(self, name: str) -> "FragmentBuilder":
        """Descend into a new ``<entry name="...">`` element."""
        return self.into("entry", {"name": name})

    def members(self, values: Iterable[str], tag: str = "member") -> "FragmentBuilder":
        """Add one ``<member>`` element per value at the current level."""
        for value in values:
            self.add(tag, text=value)
        return self

    def up(self) -> "FragmentBuilder":
        """
        Move back to the parent level.

        Raises:
            ValueError: If already at the top level
        """
        if not self._stack:
            raise ValueError("Already at the top level of the fragment")
        self._stack.pop()
        return self

    def build(self) -> ConfigFragment:
        """Return the finished fragment."""
        return ConfigFragment(draft.freeze() for draft in self._top)

    def to_xml(self) -> str:
        return self.build().to_xml()
