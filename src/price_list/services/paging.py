"""Paged row materialization driven by row-exposure notifications."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Callable, Generic, Protocol, TypeVar

from ..domain import Product
from ..utils.logging import get_logger

logger = get_logger(__name__)

PAGE_SIZE = 25

RowT = TypeVar("RowT")


class VisibilityNotifier(Protocol):
    """Fires ``callback`` once, the first time row ``index`` is exposed."""

    def on_visible_once(self, index: int, callback: Callable[[], None]) -> None:
        ...

    def cancel(self, index: int, callback: Callable[[], None]) -> None:
        ...


class ExposureHub:
    """In-memory one-shot observer for logical "row N exposed" events.

    A UI surface calls :meth:`expose` when a row scrolls into view (or when
    the user asks for more rows); registered callbacks run once and are
    dropped.
    """

    def __init__(self) -> None:
        self._pending: dict[int, list[Callable[[], None]]] = {}

    def on_visible_once(self, index: int, callback: Callable[[], None]) -> None:
        self._pending.setdefault(index, []).append(callback)

    def expose(self, index: int) -> int:
        callbacks = self._pending.pop(index, [])
        for callback in callbacks:
            callback()
        return len(callbacks)

    def cancel(self, index: int, callback: Callable[[], None]) -> None:
        callbacks = self._pending.get(index)
        if not callbacks or callback not in callbacks:
            return
        callbacks.remove(callback)
        if not callbacks:
            del self._pending[index]

    def pending(self) -> list[int]:
        return sorted(self._pending)

    def clear(self) -> None:
        self._pending.clear()


class RenderPass(Generic[RowT]):
    """Rows and page cursor of one render; discarded wholesale on re-render."""

    def __init__(self, items: Sequence[Product], generation: int) -> None:
        self.items: tuple[Product, ...] = tuple(items)
        self.generation = generation
        self.rows: list[RowT] = []
        self.page_sizes: list[int] = []
        self.trigger: tuple[int, Callable[[], None]] | None = None

    @property
    def cursor(self) -> int:
        return len(self.rows)

    @property
    def exhausted(self) -> bool:
        return self.cursor >= len(self.items)


class IncrementalRenderer(Generic[RowT]):
    """Materializes rows page by page as the last row of each page is exposed."""

    def __init__(
        self,
        build_row: Callable[[Product, int], RowT],
        notifier: VisibilityNotifier,
        page_size: int = PAGE_SIZE,
        on_page: Callable[[RenderPass[RowT], list[RowT]], None] | None = None,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.build_row = build_row
        self.notifier = notifier
        self.page_size = page_size
        self.on_page = on_page
        self._generation = 0
        self._current: RenderPass[RowT] | None = None

    @property
    def current(self) -> RenderPass[RowT] | None:
        return self._current

    @property
    def rows(self) -> list[RowT]:
        return self._current.rows if self._current is not None else []

    def render(self, items: Sequence[Product]) -> RenderPass[RowT]:
        self.reset()
        self._generation += 1
        render_pass: RenderPass[RowT] = RenderPass(items, self._generation)
        self._current = render_pass
        self._render_page(render_pass)
        return render_pass

    def reset(self) -> None:
        """Drop the current pass and withdraw its pending trigger."""
        if self._current is not None and self._current.trigger is not None:
            self.notifier.cancel(*self._current.trigger)
            self._current.trigger = None
        self._current = None

    def _render_page(self, render_pass: RenderPass[RowT]) -> None:
        if render_pass is not self._current:
            logger.debug("Ignoring exposure from abandoned render pass %d", render_pass.generation)
            return
        if render_pass.exhausted:
            return

        start = render_pass.cursor
        page = [
            self.build_row(item, start + offset)
            for offset, item in enumerate(render_pass.items[start : start + self.page_size])
        ]
        render_pass.rows.extend(page)
        render_pass.page_sizes.append(len(page))
        if self.on_page is not None:
            self.on_page(render_pass, page)

        if not render_pass.exhausted:
            index = render_pass.cursor - 1

            def advance() -> None:
                render_pass.trigger = None
                self._render_page(render_pass)

            render_pass.trigger = (index, advance)
            self.notifier.on_visible_once(index, advance)
