"""In-memory host adapters for bound-entity translation.

Element and AttributeElement are minimal stand-ins for UI elements: text
content, a space-separated class name, and one of the two metadata media.
ElementCollection plays the role of the document: it owns elements in
insertion order and finds the ones marked for translation.

Real hosts (widget toolkits, HTML trees, template nodes) only need to
satisfy the protocols in j18s.binding.stores; these classes are not
required.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from j18s.constants import TRANSLATE_CLASS_NAME

__all__ = [
    "AttributeElement",
    "Element",
    "ElementCollection",
    "add_class_name",
    "has_class_name",
    "mark_for_translation",
]


def has_class_name(entity: object, name: str) -> bool:
    """Check whether name is one of entity's space-separated class names."""
    return name in str(getattr(entity, "class_name", "") or "").split()


def add_class_name(entity: object, name: str) -> None:
    """Append name to entity's class names, keeping the existing ones."""
    current = str(getattr(entity, "class_name", "") or "")
    if name not in current.split():
        updated = f"{current} {name}" if current.strip() else name
        entity.class_name = updated  # type: ignore[attr-defined]


def mark_for_translation(entity: object) -> None:
    """Tag entity so refreshes pick it up."""
    add_class_name(entity, TRANSLATE_CLASS_NAME)


class Element:
    """Element with a structured ``dataset`` metadata store.

    Example:
        >>> element = Element("Hello")
        >>> element.dataset["j18sContext"] = "menu"
        >>> element
        Element(content='Hello', class_name='')
    """

    __slots__ = ("class_name", "content", "dataset")

    def __init__(
        self,
        content: str = "",
        *,
        class_name: str = "",
        dataset: dict[str, object] | None = None,
    ) -> None:
        self.content = content
        self.class_name = class_name
        self.dataset: dict[str, object] = dataset if dataset is not None else {}

    def __repr__(self) -> str:
        return f"Element(content={self.content!r}, class_name={self.class_name!r})"


class AttributeElement:
    """Element with flat string attributes only."""

    __slots__ = ("_attributes", "class_name", "content")

    def __init__(
        self,
        content: str = "",
        *,
        class_name: str = "",
        attributes: dict[str, str] | None = None,
    ) -> None:
        self.content = content
        self.class_name = class_name
        self._attributes: dict[str, str] = dict(attributes or {})

    def get_attribute(self, name: str) -> str | None:
        return self._attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        self._attributes[name] = str(value)

    def remove_attribute(self, name: str) -> None:
        self._attributes.pop(name, None)

    @property
    def attributes(self) -> dict[str, str]:
        """Copy of all attributes."""
        return dict(self._attributes)

    def __repr__(self) -> str:
        return f"AttributeElement(content={self.content!r}, class_name={self.class_name!r})"


class ElementCollection:
    """Ordered collection of elements, searchable by class name.

    Example:
        >>> document = ElementCollection()
        >>> title = document.add(Element("Title", class_name="j18s-translate"))
        >>> document.marked() == [title]
        True
    """

    __slots__ = ("_elements",)

    def __init__(self, elements: Iterable[object] = ()) -> None:
        self._elements: list[object] = list(elements)

    def add[T](self, element: T) -> T:
        """Append element and return it."""
        self._elements.append(element)
        return element

    def remove(self, element: object) -> None:
        """Remove element (identity match).

        Raises:
            ValueError: If element is not in the collection
        """
        for index, candidate in enumerate(self._elements):
            if candidate is element:
                del self._elements[index]
                return
        msg = f"{element!r} is not in the collection"
        raise ValueError(msg)

    def find_by_class_name(self, name: str) -> list[object]:
        """Elements carrying class name, in insertion order.

        A leading "." is ignored, so selector-style names work.
        """
        name = name.removeprefix(".")
        return [element for element in self._elements if has_class_name(element, name)]

    def marked(self) -> list[object]:
        """Elements tagged for translation, in insertion order."""
        return self.find_by_class_name(TRANSLATE_CLASS_NAME)

    def __iter__(self) -> Iterator[object]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)
