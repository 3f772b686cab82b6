"""Fragment caching for cell states.

A state is cached when its cell class declared it with ``Cell.caches`` and
caching is switched on for the process::

    class ArticleCell(Cell):
        def recent(self): ...

    ArticleCell.caches("recent", condition=lambda params: not params.get("preview"))

Cache keys are built from the cell name, the state and a digest of the
parameters, so the parameters must be made of values with a stable string
form: strings, integers, booleans, None, classes, enums, and mappings,
sequences or sets of those. Objects may provide ``to_cache_key()``.
Zero-argument callables are called and their result is used. Anything else
makes the state uncacheable for that call and it is rendered normally.

The canonical form is the string form of each part joined with ``;``, so it
does not record types or nesting. Parameters that only differ there, such as
``None`` and ``"None"`` or ``"a;b"`` and ``["a", "b"]``, share a fragment. Cells
that take such parameters should pass a ``to_cache_key()`` object or keep
the state uncached.
"""

import base64
import hashlib
from collections.abc import Callable, Iterable, Mapping, Set
from enum import Enum
from typing import TYPE_CHECKING, Any

from viewcells.exceptions import NotCacheable
from viewcells.logging_config import get_logger, log_with_context
from viewcells.protocols import FragmentStoreProtocol

if TYPE_CHECKING:
    from viewcells.base import Cell


logger = get_logger(__name__)

CACHE_ALL = "all"
CACHE_NONE = "none"

KEY_SEPARATOR = ";"


def cache_key(cell_name: str, state: str, params: Mapping[str, Any]) -> str:
    """Deterministic fragment key: ``<cell>|<state>|<base64 md5 of the parameters>``.

    Raises:
        NotCacheable: If a parameter has no stable string form
    """
    digest = hashlib.md5(recursive_key(params).encode("utf-8")).digest()
    return f"{cell_name}|{state}|{base64.b64encode(digest).decode('ascii')}"


def recursive_key(collection: Any) -> str:
    """Canonical string form of a parameter collection.

    Mappings are ordered by key, sequences keep their order, sets are
    ordered by the canonical form of their members.
    """
    if isinstance(collection, Mapping):
        items: Iterable[Any] = [[key, value] for key, value in sorted(collection.items(), key=lambda kv: str(kv[0]))]
    elif isinstance(collection, Set):
        items = sorted(_key_part(member) for member in collection)
        return KEY_SEPARATOR.join(items)
    else:
        items = collection

    return KEY_SEPARATOR.join(_key_part(item) for item in items)


def _key_part(value: Any) -> str:
    to_cache_key = getattr(value, "to_cache_key", None)
    if callable(to_cache_key) and not isinstance(value, type):
        return str(to_cache_key())

    if value is None or isinstance(value, (str, int, type)):
        return str(value)
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (Mapping, Set, list, tuple)):
        return recursive_key(value)
    if callable(value):
        try:
            return _key_part(value())
        except Exception as e:
            log_with_context(
                logger,
                "debug",
                "Callable cache parameter failed, using empty key part",
                error=str(e),
                error_type=type(e).__name__,
                event_type="cache_key_callable_error",
            )
            return ""
    if isinstance(value, Iterable):
        return recursive_key(value)

    raise NotCacheable(
        f"Uncacheable parameter {type(value).__name__} {value!r}",
        details={"parameter_type": type(value).__name__},
    )


class CachingDecorator:
    """Wraps a cell and serves its state output from a fragment store.

    Exposes the same ``render_state`` contract as the cell it wraps.
    """

    def __init__(
        self,
        cell: "Cell",
        store: FragmentStoreProtocol,
        enabled: bool = False,
        cache_states: Mapping[str, Any] | None = None,
        store_options: Mapping[str, Any] | None = None,
    ):
        """Initialize the decorator.

        Args:
            cell: Cell whose states are rendered
            store: Fragment store for reads and writes
            enabled: Process-wide caching switch
            cache_states: State -> rule declarations (defaults to the cell class's)
            store_options: Passed to every store write (e.g. expires_in)
        """
        self.cell = cell
        self.store = store
        self.enabled = enabled
        self.cache_states = dict(type(cell).cache_states if cache_states is None else cache_states)
        self.store_options = dict(store_options or {})

    def should_cache(self, state: str, params: Mapping[str, Any]) -> bool:
        if not self.enabled:
            return False
        if CACHE_NONE in self.cache_states and self._evaluate(self.cache_states[CACHE_NONE], params):
            return False

        rule = self.cache_states.get(state, self.cache_states.get(CACHE_ALL))
        if rule is None:
            return False
        return self._evaluate(rule, params)

    def render_state(self, state: str) -> str | None:
        state = str(state)
        params = self.cell.params
        if not self.should_cache(state, params):
            return self.cell.render_state(state)

        try:
            key = cache_key(self.cell.cell_name, state, params)
        except NotCacheable as e:
            log_with_context(
                logger,
                "warning",
                f"Can't cache: {state} with params: {dict(params)!r}",
                cell_name=self.cell.cell_name,
                state=state,
                error=e.message,
                event_type="cell_not_cacheable",
            )
            return self.cell.render_state(state)

        cached = self.store.read(key)
        if cached:
            log_with_context(
                logger,
                "debug",
                "Cell cache hit",
                cell_name=self.cell.cell_name,
                state=state,
                cache_key=key,
                event_type="cell_cache_hit",
            )
            return cached

        log_with_context(
            logger,
            "debug",
            "Cell cache miss, rendering",
            cell_name=self.cell.cell_name,
            state=state,
            cache_key=key,
            event_type="cell_cache_miss",
        )
        content = self.cell.render_state(state)
        if content is None:
            return None

        self.store.write(key, content, **self.store_options)
        stored = self.store.read(key)
        return stored if stored is not None else content

    def _evaluate(self, rule: Any, params: Mapping[str, Any]) -> bool:
        if isinstance(rule, str):
            rule = getattr(self.cell, rule)
        if callable(rule):
            return bool(rule(params))
        return bool(rule)
