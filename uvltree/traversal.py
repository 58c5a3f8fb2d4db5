"""
Depth-first traversal of feature trees.

The traversal keeps an explicit stack instead of recursing, so trees of any
depth can be visited.
"""

from enum import Enum


class TraversalAction(Enum):
    CONTINUE = "continue"
    SKIP_CHILDREN = "skip_children"
    SKIP_ALL = "skip_all"
    FAIL = "fail"


class TreeVisitor:
    """Base class for visitors driven by ``traverse``.

    ``first_visit`` is called when a node is entered, ``last_visit`` after
    all of its children have been visited. Both receive the path from the
    root to the current node; the current node is ``path[-1]``.
    """

    def first_visit(self, path):
        return TraversalAction.CONTINUE

    def last_visit(self, path):
        return TraversalAction.CONTINUE

    def reset(self):
        pass

    def get_result(self):
        return None


def traverse(root, visitor):
    """Visit the tree below ``root`` and return ``visitor.get_result()``."""
    visitor.reset()
    path = []
    # entries are (node, entered)
    stack = [(root, False)]
    while stack:
        node, entered = stack.pop()
        if entered:
            action = visitor.last_visit(path)
            path.pop()
        else:
            path.append(node)
            action = visitor.first_visit(path)
            if action is TraversalAction.CONTINUE:
                stack.append((node, True))
                for child in reversed(node.children):
                    stack.append((child, False))
            elif action is TraversalAction.SKIP_CHILDREN:
                stack.append((node, True))
        if action is TraversalAction.FAIL or action is TraversalAction.SKIP_ALL:
            break
    return visitor.get_result()
