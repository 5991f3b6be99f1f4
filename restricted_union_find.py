from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from errors import IndexOutOfRange, InvalidGraph
from graph import is_int
from log_setup import get_logger


logger = get_logger(__name__)

APPROVED = "approved"
DENIED = "denied"

Pair = Tuple[int, int]


def _as_pair(raw: Sequence, kind: str) -> Pair:
    try:
        a, b = raw
    except (TypeError, ValueError) as exc:
        raise InvalidGraph(f"{kind.capitalize()} must be a pair (a, b), got {raw!r}.") from exc
    return a, b


class RestrictedUnionFind:
    """Disjoint sets whose merges are vetoed by fixed pairwise restrictions.

    A restriction ``(a, b)`` forbids the group holding ``a`` and the group
    holding ``b`` from ever becoming one group, directly or through earlier
    merges. Requests are judged against the current representatives, so a
    request can become infeasible only because of unions approved before it.
    Groups only ever merge; every decision is final once recorded.
    """

    def __init__(self, node_count: int, restrictions: Iterable[Sequence] = ()) -> None:
        if not is_int(node_count) or node_count < 0:
            raise InvalidGraph(f"Node count must be a non-negative integer, got {node_count!r}.")

        self.node_count = node_count
        self.parent: List[int] = list(range(node_count))
        self.rank: List[int] = [0] * node_count

        pairs = [_as_pair(raw, "restriction") for raw in restrictions]
        for a, b in pairs:
            self._check(a)
            self._check(b)
        self.restrictions: Tuple[Pair, ...] = tuple(pairs)
        self._decisions: List[str] = []

    def _check(self, node: object) -> None:
        if not is_int(node) or not 0 <= node < self.node_count:
            raise IndexOutOfRange(f"Node {node!r} outside [0, {self.node_count}).")

    def find(self, node: int) -> int:
        """Return the representative of ``node``'s group.

        Every node visited on the way up is repointed straight at the root.
        """
        self._check(node)
        root = self._root(node)
        self._compress(node, root)
        return root

    def _root(self, node: int) -> int:
        while self.parent[node] != node:
            node = self.parent[node]
        return node

    def _compress(self, node: int, root: int) -> None:
        while self.parent[node] != root:
            self.parent[node], node = root, self.parent[node]

    def union(self, node1: int, node2: int) -> bool:
        """Merge the groups of ``node1`` and ``node2``.

        Returns False, leaving ``parent`` and ``rank`` untouched, when they
        already share a representative. The lower-rank root goes under the
        higher-rank one; on a tie ``node2``'s root goes under ``node1``'s.
        """
        self._check(node1)
        self._check(node2)

        # Roots are located without compression so a no-op union writes nothing.
        root1 = self._root(node1)
        root2 = self._root(node2)
        if root1 == root2:
            return False

        self._compress(node1, root1)
        self._compress(node2, root2)

        if self.rank[root1] < self.rank[root2]:
            self.parent[root1] = root2
        elif self.rank[root1] > self.rank[root2]:
            self.parent[root2] = root1
        else:
            self.parent[root2] = root1
            self.rank[root1] += 1
        return True

    def connected(self, node1: int, node2: int) -> bool:
        return self.find(node1) == self.find(node2)

    def groups(self) -> Dict[int, List[int]]:
        """Return mapping from root -> sorted member ids."""
        result: Dict[int, List[int]] = defaultdict(list)
        for node in range(self.node_count):
            result[self.find(node)].append(node)
        return dict(result)

    def __len__(self) -> int:
        return sum(1 for node in range(self.node_count) if self.parent[node] == node)

    def violated_restriction(self, node1: int, node2: int) -> Optional[Pair]:
        """First restriction that joining ``node1`` and ``node2`` would break."""
        roots = {self.find(node1), self.find(node2)}
        logger.debug("Roots of %d and %d: %s", node1, node2, sorted(roots))

        for restricted_a, restricted_b in self.restrictions:
            restricted_roots = {self.find(restricted_a), self.find(restricted_b)}
            logger.debug(
                "Restriction (%d, %d) has roots %s",
                restricted_a,
                restricted_b,
                sorted(restricted_roots),
            )
            if roots == restricted_roots:
                return restricted_a, restricted_b
        return None

    def request(self, node1: int, node2: int) -> str:
        """Decide one join request and record the decision."""
        self._check(node1)
        self._check(node2)

        violated = self.violated_restriction(node1, node2)
        if violated is not None:
            logger.debug("Request (%d, %d) denied by restriction %s", node1, node2, violated)
            decision = DENIED
        else:
            self.union(node1, node2)
            logger.debug("Request (%d, %d) approved", node1, node2)
            decision = APPROVED

        self._decisions.append(decision)
        return decision

    def process_requests(self, requests: Iterable[Sequence]) -> List[str]:
        """Decide ``requests`` in order; nothing is applied if any id is invalid."""
        pairs = [_as_pair(raw, "request") for raw in requests]
        for a, b in pairs:
            self._check(a)
            self._check(b)
        return [self.request(a, b) for a, b in pairs]

    @property
    def decisions(self) -> List[str]:
        return list(self._decisions)


def process_requests(
    node_count: int, restrictions: Iterable[Sequence], requests: Iterable[Sequence]
) -> List[str]:
    """Return "approved"/"denied" for each request, in request order."""
    partition = RestrictedUnionFind(node_count, restrictions)
    return partition.process_requests(requests)
