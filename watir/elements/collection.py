# watir/elements/collection.py
from __future__ import annotations

from typing import Any, Callable, Dict, Generic, Iterator, List, Mapping, Optional, Tuple, Type, TypeVar

from selenium.common.exceptions import NoSuchWindowException

from watir.elements.element import Element
from watir.exceptions import UnknownObjectError
from watir.utils.logger import get_logger
from watir.wait import Waitable

log = get_logger(__name__)

E = TypeVar("E", bound=Element)


class ElementCollection(Waitable, Generic[E]):
    """
    Lazy, indexable view over every element matching a selector.

    The query runs on first use and the resulting handles are memoized;
    call `reset()` to query again. Indexing past the end never raises: it
    returns a lazy handle with the index merged into the selector.
    """

    def __init__(self, query_scope: Any, selector: Mapping[str, Any], element_class: Type[E]) -> None:
        self.query_scope = query_scope
        self.selector: Dict[str, Any] = dict(selector)
        self.element_class = element_class
        self._elements: Optional[List[E]] = None

    @property
    def browser(self):
        return self.query_scope.browser

    def _is_generic(self) -> bool:
        from watir.elements.html_elements import HTMLElement
        from watir.elements.input import Input

        return self.element_class in (Element, HTMLElement, Input)

    # ---------- Materialisation ----------

    def to_list(self) -> List[E]:
        if self._elements is None:
            self._elements = self._materialize()
        return self._elements

    locate = to_list

    def _materialize(self) -> List[E]:
        strategy = self.element_class.build_strategy(self.selector, multiple=True)
        try:
            self.query_scope.ensure_child_context()
            natives = list(strategy.locate_all(self.query_scope.search_context()))
        except NoSuchWindowException as e:
            raise UnknownObjectError(f"window was closed, unable to locate {self!r}") from e

        elements: List[E] = []
        per_subtype: Dict[Tuple[Any, ...], int] = {}
        generic = self._is_generic()

        for position, native in enumerate(natives):
            element = self.element_class(self.query_scope, {**self.selector, "element": native, "index": position})
            if generic:
                subtype = element.to_subtype()
                key, narrowed = self._relocation_scope(subtype)
                sub_index = per_subtype.get(key, 0)
                per_subtype[key] = sub_index + 1
                element = type(subtype)(self.query_scope, {
                    **self.selector,
                    **narrowed,
                    "element": native,
                    "index": sub_index,
                })
            element.collection_index = position
            elements.append(element)

        log.debug(f"{type(self).__name__} {self.selector!r} materialized {len(elements)} element(s)")
        return elements

    def _relocation_scope(self, subtype: Element) -> Tuple[Tuple[Any, ...], Dict[str, Any]]:
        """
        Selector keys that narrow a subtype's relocation query, plus the key
        grouping the natives that query matches. Two natives share a key
        exactly when the subtype's query would find both, so the count under
        a key is the subtype's index.
        """
        from watir.elements.input import Input

        tag = subtype.tag_name
        narrowed: Dict[str, Any] = {"tag_name": tag}
        cls = type(subtype)
        if "xpath" in self.selector or "css" in self.selector:
            # user queries are only narrowed by a tag filter
            return (tag,), narrowed
        if not cls.builder_class.honors_tag_name:
            return (cls,), narrowed
        if cls is Input:
            narrowed["type"] = subtype.type
            return (cls, tag, narrowed["type"]), narrowed
        return (cls, tag), narrowed

    def reset(self) -> None:
        self._elements = None

    # ---------- Waiting ----------

    def _fresh(self, predicate: Optional[Callable[[Any], Any]]) -> Callable[[Any], Any]:
        predicate = predicate or (lambda c: c.exists)

        def evaluate(collection: "ElementCollection") -> Any:
            collection.reset()
            return predicate(collection)

        return evaluate

    def wait_until(self, predicate=None, timeout=None, interval=None, message=None):
        return super().wait_until(self._fresh(predicate), timeout=timeout, interval=interval, message=message)

    def wait_while(self, predicate=None, timeout=None, interval=None, message=None):
        return super().wait_while(self._fresh(predicate), timeout=timeout, interval=interval, message=message)

    # ---------- Sequence protocol ----------

    def __iter__(self) -> Iterator[E]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return len(self.to_list())

    def __getitem__(self, index: int) -> E:
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"collection indices must be integers, not {type(index).__name__}")
        elements = self.to_list()
        if -len(elements) <= index < len(elements):
            return elements[index]
        return self.element_class(self.query_scope, {**self.selector, "index": index})

    at = __getitem__

    @property
    def first(self) -> E:
        return self[0]

    @property
    def last(self) -> E:
        return self[-1]

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    @property
    def exists(self) -> bool:
        return not self.is_empty

    @property
    def present(self) -> bool:
        return self.exists

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ElementCollection):
            return NotImplemented
        return self.to_list() == other.to_list()

    __hash__ = None  # mutable view

    def __repr__(self) -> str:
        state = "unlocated" if self._elements is None else f"{len(self._elements)} element(s)"
        return f"<{type(self).__name__} {self.element_class.__name__} {state} selector={self.selector!r}>"
