"""Ordered element matchers for locating parts of the webmail compose surface.

Each chain is evaluated in list order and the first matcher that finds an
element wins, regardless of where that element sits in the document. Swap a
chain when the host markup changes.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol, Sequence, Tuple

from bs4 import Tag


class Matcher(Protocol):
    def find(self, root: Tag) -> Optional[Tag]: ...

    def matches(self, node: Tag) -> bool: ...


@dataclass(frozen=True)
class CssMatcher:
    selector: str

    def find(self, root: Tag) -> Optional[Tag]:
        return root.select_one(self.selector)

    def matches(self, node: Tag) -> bool:
        return bool(node.css.match(self.selector))


@dataclass(frozen=True)
class PredicateMatcher:
    predicate: Callable[[Tag], bool]
    name: str = "predicate"

    def find(self, root: Tag) -> Optional[Tag]:
        return root.find(self.predicate)

    def matches(self, node: Tag) -> bool:
        return bool(self.predicate(node))


class MatcherChain:
    def __init__(self, matchers: Iterable[Matcher]):
        self.matchers: Tuple[Matcher, ...] = tuple(matchers)

    @classmethod
    def of(cls, *selectors: str) -> "MatcherChain":
        return cls(CssMatcher(s) for s in selectors)

    def first_match(self, root: Tag) -> Optional[Tag]:
        for matcher in self.matchers:
            found = matcher.find(root)
            if found is not None:
                return found
        return None


class ComposeMarkers:
    """Recognizes nodes that belong to a freshly opened compose surface.

    A node counts when it matches one of ``own`` or contains a descendant
    matching one of ``descendant``.
    """

    def __init__(self, own: Sequence[str], descendant: Sequence[str]):
        self.own = MatcherChain.of(*own)
        self.descendant = MatcherChain.of(*descendant)

    def matches(self, node: Tag) -> bool:
        if any(m.matches(node) for m in self.own.matchers):
            return True
        return self.descendant.first_match(node) is not None

    def present_in(self, root: Tag) -> bool:
        return self.own.first_match(root) is not None


TOOLBAR_CHAIN = MatcherChain.of(".btC", ".aDh", '[role="toolbar"]', ".gU.Up")

CONTENT_CHAIN = MatcherChain.of(".h7", ".a3s.aiL", ".gmail_quote", '[role="presentation"]')

EDITABLE_CHAIN = MatcherChain.of('[role="textbox"][g_editable="true"]')

COMPOSE_MARKERS = ComposeMarkers(
    own=(".aDh", ".btC", '[role="dialog"]'),
    descendant=(".aDh", ".btC"),
)
