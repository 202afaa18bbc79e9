# app/services/path_search.py
"""
Dijkstra shortest path over an adjacency list of node indices.

Selection of the next node always prefers the smallest tentative distance
and, among equal distances, the smallest index. The linear-scan and heap
variants therefore visit nodes in the same order and return identical paths.
"""
import heapq
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from app.services.graph_builder import AdjacencyList

STRATEGY_LINEAR = "linear"
STRATEGY_HEAP = "heap"


@dataclass(frozen=True)
class SearchResult:
    path: List[int]
    distance_m: float


def _linear_scan(
    adj: AdjacencyList, start: int, goal: int
) -> Tuple[List[float], List[Optional[int]]]:
    n = len(adj)
    dist = [math.inf] * n
    prev: List[Optional[int]] = [None] * n
    visited = [False] * n

    dist[start] = 0.0
    for _ in range(n):
        u, best = -1, math.inf
        for i in range(n):
            if not visited[i] and dist[i] < best:
                best = dist[i]
                u = i
        if u == -1:
            break
        # stop once the goal is the closest unvisited node
        if u == goal:
            break
        visited[u] = True

        for to, weight in adj[u]:
            if visited[to]:
                continue
            alt = dist[u] + weight
            if alt < dist[to]:
                dist[to] = alt
                prev[to] = u

    return dist, prev


def _heap_scan(
    adj: AdjacencyList, start: int, goal: int
) -> Tuple[List[float], List[Optional[int]]]:
    n = len(adj)
    dist = [math.inf] * n
    prev: List[Optional[int]] = [None] * n
    visited = [False] * n

    dist[start] = 0.0
    queue: List[Tuple[float, int]] = [(0.0, start)]
    while queue:
        d, u = heapq.heappop(queue)
        if visited[u] or d > dist[u]:
            continue
        if u == goal:
            break
        visited[u] = True

        for to, weight in adj[u]:
            if visited[to]:
                continue
            alt = d + weight
            if alt < dist[to]:
                dist[to] = alt
                prev[to] = u
                heapq.heappush(queue, (alt, to))

    return dist, prev


def _walk_back(prev: List[Optional[int]], start: int, goal: int) -> List[int]:
    path: List[int] = []
    cur: Optional[int] = goal
    while cur is not None:
        path.append(cur)
        cur = prev[cur]
    path.reverse()
    return path if path[0] == start else []


def _in_range(adj: AdjacencyList, index: int) -> bool:
    return 0 <= index < len(adj)


def shortest_path(adj: AdjacencyList, start: int, goal: int) -> List[int]:
    """
    Node indices from `start` to `goal`, or an empty list when the goal
    cannot be reached (including goals outside the graph).
    """
    return search(adj, start, goal, STRATEGY_LINEAR).path


def shortest_path_heap(adj: AdjacencyList, start: int, goal: int) -> List[int]:
    """Same contract as `shortest_path`, using a binary heap."""
    return search(adj, start, goal, STRATEGY_HEAP).path


def search(
    adj: AdjacencyList,
    start: int,
    goal: int,
    strategy: str = STRATEGY_LINEAR,
) -> SearchResult:
    if not (_in_range(adj, start) and _in_range(adj, goal)):
        return SearchResult(path=[], distance_m=math.inf)

    if strategy == STRATEGY_LINEAR:
        dist, prev = _linear_scan(adj, start, goal)
    elif strategy == STRATEGY_HEAP:
        dist, prev = _heap_scan(adj, start, goal)
    else:
        raise ValueError(f"Unknown search strategy: {strategy!r}")

    path = _walk_back(prev, start, goal)
    if not path:
        return SearchResult(path=[], distance_m=math.inf)
    return SearchResult(path=path, distance_m=dist[goal])
