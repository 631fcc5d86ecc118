"""Observable HTML document used by the compose surface watcher.

The host page is held as a BeautifulSoup tree. Every mutation made through
ObservedDocument is reported to registered observers as a batch of
MutationRecord objects, the way a browser MutationObserver reports
childList changes with ``subtree: true``.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag

from services.exceptions import ElementNotFound

MutationCallback = Callable[[List["MutationRecord"]], None]
ClickHandler = Callable[[Tag], Any]

PARSER = "html.parser"


@dataclass
class MutationRecord:
    target: Tag
    added_nodes: List[PageElement] = field(default_factory=list)
    removed_nodes: List[PageElement] = field(default_factory=list)


def is_within(node: PageElement, ancestor: Tag) -> bool:
    if node is ancestor:
        return True
    return any(parent is ancestor for parent in node.parents)


class ObservedDocument:
    def __init__(self, markup: str = ""):
        self.soup = BeautifulSoup(markup, PARSER)
        self._observers: List[Tuple[MutationCallback, Tag]] = []
        self._listeners: Dict[int, Tuple[Tag, List[ClickHandler]]] = {}
        self._focused: Optional[Tag] = None

    @property
    def body(self) -> Optional[Tag]:
        return self.soup.body

    @property
    def focused(self) -> Optional[Tag]:
        return self._focused

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def select(self, selector: str) -> List[Tag]:
        return list(self.soup.select(selector))

    def new_tag(self, name: str, attrs: Optional[Dict[str, Any]] = None, text: str = "") -> Tag:
        tag = self.soup.new_tag(name, attrs=attrs or {})
        if text:
            tag.string = text
        return tag

    # -- observation --------------------------------------------------------

    def observe(self, callback: MutationCallback, target: Optional[Tag] = None) -> None:
        """Report mutations inside ``target`` (default: whole document) to ``callback``."""
        self.disconnect(callback)
        self._observers.append((callback, target if target is not None else self.soup))

    def disconnect(self, callback: MutationCallback) -> None:
        self._observers = [(cb, t) for cb, t in self._observers if cb != callback]

    def _notify(self, record: MutationRecord) -> None:
        for callback, target in list(self._observers):
            if is_within(record.target, target):
                callback([record])

    # -- mutation -----------------------------------------------------------

    def append(self, parent: Tag, content: Union[str, Tag]) -> List[PageElement]:
        """Append a tag or an HTML fragment to ``parent`` and report it."""
        if isinstance(content, str):
            fragment = BeautifulSoup(content, PARSER)
            nodes = [node.extract() for node in list(fragment.contents)]
        else:
            nodes = [content]
        for node in nodes:
            parent.append(node)
        self._notify(MutationRecord(target=parent, added_nodes=nodes))
        return nodes

    def insert_first(self, parent: Tag, tag: Tag) -> None:
        parent.insert(0, tag)
        self._notify(MutationRecord(target=parent, added_nodes=[tag]))

    def remove(self, tag: Tag) -> None:
        parent = tag.parent
        if parent is None:
            return
        for key, (owner, _) in list(self._listeners.items()):
            if is_within(owner, tag):
                del self._listeners[key]
        if self._focused is not None and is_within(self._focused, tag):
            self._focused = None
        tag.extract()
        self._notify(MutationRecord(target=parent, removed_nodes=[tag]))

    def focus(self, tag: Tag) -> None:
        self._focused = tag

    def insert_text(self, text: str) -> None:
        """Insert text at the caret of the focused element.

        The caret sits at the end of the element's content once focused.
        """
        if self._focused is None:
            raise ElementNotFound("No focused element to insert text into")
        node = NavigableString(text)
        self._focused.append(node)
        self._notify(MutationRecord(target=self._focused, added_nodes=[node]))

    # -- events -------------------------------------------------------------

    def add_click_listener(self, tag: Tag, handler: ClickHandler) -> None:
        self._listeners.setdefault(id(tag), (tag, []))[1].append(handler)

    def click(self, tag: Tag) -> Optional[Awaitable[Any]]:
        """Dispatch a click to ``tag``'s listeners.

        Coroutine handlers are scheduled on the running loop; the returned
        awaitable completes when they do.
        """
        _, handlers = self._listeners.get(id(tag), (tag, []))
        tasks: List[asyncio.Future] = []
        for handler in list(handlers):
            result = handler(tag)
            if asyncio.iscoroutine(result):
                tasks.append(asyncio.ensure_future(result))
        if not tasks:
            return None
        if len(tasks) == 1:
            return tasks[0]
        return asyncio.gather(*tasks)
