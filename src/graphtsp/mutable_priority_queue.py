"""Binary min-heap over vertices with O(log n) decrease-key.

The sort key is not stored in the heap: the queue calls ``key(vertex)`` on
demand, so callers lower a vertex's tentative distance wherever they keep it
(a ``TraversalContext``) and then call ``decrease_key``. The slot of every
queued vertex is tracked in ``_index`` (vertex id -> heap position) and kept
current on every swap, which is what makes decrease-key logarithmic.
"""
from __future__ import annotations

from typing import Callable, Dict, List

from graphtsp.graph import Vertex


class MutablePriorityQueue:
    def __init__(self, key: Callable[[Vertex], float]):
        self._key = key
        self._heap: List[Vertex] = []
        self._index: Dict[str, int] = {}

    def insert(self, vertex: Vertex) -> None:
        self._heap.append(vertex)
        self._index[vertex.id] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def extract_min(self) -> Vertex:
        if not self._heap:
            raise IndexError("extract_min from an empty priority queue")
        top = self._heap[0]
        last = self._heap.pop()
        del self._index[top.id]
        if self._heap:
            self._heap[0] = last
            self._index[last.id] = 0
            self._sift_down(0)
        return top

    def decrease_key(self, vertex: Vertex) -> None:
        """Restore heap order after ``key(vertex)`` has been lowered."""
        self._sift_up(self._index[vertex.id])

    def empty(self) -> bool:
        return not self._heap

    def position(self, vertex: Vertex) -> int:
        return self._index[vertex.id]

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, vertex: object) -> bool:
        return isinstance(vertex, Vertex) and vertex.id in self._index

    def _sift_up(self, i: int) -> None:
        heap = self._heap
        item = heap[i]
        item_key = self._key(item)
        while i > 0:
            parent = (i - 1) // 2
            if self._key(heap[parent]) <= item_key:
                break
            heap[i] = heap[parent]
            self._index[heap[i].id] = i
            i = parent
        heap[i] = item
        self._index[item.id] = i

    def _sift_down(self, i: int) -> None:
        heap = self._heap
        n = len(heap)
        item = heap[i]
        item_key = self._key(item)
        while True:
            child = 2 * i + 1
            if child >= n:
                break
            right = child + 1
            if right < n and self._key(heap[right]) < self._key(heap[child]):
                child = right
            if item_key <= self._key(heap[child]):
                break
            heap[i] = heap[child]
            self._index[heap[i].id] = i
            i = child
        heap[i] = item
        self._index[item.id] = i
