"""Domain-name trie keyed label by label from the top-level domain down.

A label of ``*`` acts as a wildcard that matches any remaining labels
below it when no more specific entry is found.
"""

from __future__ import annotations

WILDCARD = "*"


def split_domain(domain: str) -> list:
    """Split ``domain`` into its dot-separated labels, left to right."""
    if domain is None:
        raise ValueError("domain must not be None")
    return domain.split(".")


class _Node:
    __slots__ = ("key", "value", "children")

    def __init__(self, key=None):
        self.key = key
        self.value = None
        self.children = []

    def child(self, key):
        for node in self.children:
            if node.key == key:
                return node
        return None


class DomainTrie:
    """Maps domain names (optionally with ``*`` wildcards) to values."""

    def __init__(self):
        self._root = _Node()

    @staticmethod
    def _labels(domain):
        labels = split_domain(domain)
        labels.reverse()
        return labels

    def insert(self, domain, value):
        """Store ``value`` under ``domain``.

        Returns ``None`` on success. If the domain already holds a value,
        that value is returned and left unchanged.
        """
        if value is None:
            raise ValueError("value must not be None")
        node = self._root
        for key in self._labels(domain):
            nxt = node.child(key)
            if nxt is None:
                nxt = _Node(key)
                node.children.append(nxt)
            node = nxt
        if node.value is None:
            node.value = value
            return None
        return node.value

    def get(self, domain):
        """Return the value for ``domain``, falling back to wildcards, or ``None``."""
        return self._lookup(self._root, self._labels(domain), 0, None)

    def _lookup(self, node, labels, depth, wildcard):
        key = labels[depth]
        last = depth == len(labels) - 1
        result = None
        for child in node.children:
            if child.key == key:
                if last:
                    result = child.value
                    break
                result = self._lookup(child, labels, depth + 1, wildcard)
                if result is None and wildcard is None:
                    continue
                break
            if child.key == WILDCARD:
                wildcard = child.value
        return wildcard if result is None else result

    def remove(self, domain):
        """Remove ``domain`` and return its value, or ``None`` if absent.

        Nodes left with neither a value nor children are pruned.
        """
        return self._remove(self._root, self._labels(domain), 0)

    def _remove(self, node, labels, depth):
        child = node.child(labels[depth])
        if child is None:
            return None
        if depth == len(labels) - 1:
            value = child.value
            child.value = None
        else:
            value = self._remove(child, labels, depth + 1)
        if not child.children and child.value is None:
            node.children.remove(child)
        return value

    def values(self):
        """Yield every stored value, parents before their children."""
        yield from self._walk(self._root)

    def _walk(self, node):
        for child in node.children:
            if child.value is not None:
                yield child.value
            yield from self._walk(child)

    def dump(self) -> str:
        """Return a text listing of the stored paths, one block per top label."""
        lines = []

        def visit(node, prefix):
            path = f"{prefix}{node.key} "
            if node.value is not None:
                lines.append(f"{path} child[{len(node.children)}]\n")
            for child in node.children:
                visit(child, path)

        for top in self._root.children:
            visit(top, "")
            lines.append("\n--------\n")
        return "".join(lines)