"""
Decision-tree trading rules.

A rule is a binary tree whose internal nodes compare an indicator value
against a threshold and whose leaves emit a trading signal. All structural
operators work in place on the tree they are called on and report whether
anything changed; callers clone first when the original must survive.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Optional, Sequence, Union

from .indicators import Indicator, get_indicator

if TYPE_CHECKING:
    from ..data.security import Security

# Gaussian perturbation sigma as a fraction of the indicator's range
GAUSS_SCALE = 0.1


class Signal(str, Enum):
    """Trading signal emitted by a leaf."""
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


class Inequality(str, Enum):
    """Comparison applied by a decision node."""
    LESS = "<"
    GREATER = ">"

    def compare(self, value: float, threshold: float) -> bool:
        if self is Inequality.LESS:
            return value < threshold
        return value > threshold

    def flipped(self) -> "Inequality":
        return Inequality.GREATER if self is Inequality.LESS else Inequality.LESS


@dataclass
class SignalNode:
    """Terminal node."""
    signal: Signal

    def evaluate(self, security: "Security", period: int) -> Signal:
        return self.signal

    def depth(self) -> int:
        return 1

    def size(self) -> int:
        return 1

    def __str__(self) -> str:
        return self.signal.value.upper()


@dataclass
class DecisionNode:
    """Internal node: ``indicator <inequality> threshold``."""
    indicator: str
    inequality: Inequality
    threshold: float
    when_true: "Node"
    when_false: "Node"

    def evaluate(self, security: "Security", period: int) -> Signal:
        value = security.indicator(self.indicator, period)
        if self.inequality.compare(value, self.threshold):
            return self.when_true.evaluate(security, period)
        return self.when_false.evaluate(security, period)

    def depth(self) -> int:
        return 1 + max(self.when_true.depth(), self.when_false.depth())

    def size(self) -> int:
        return 1 + self.when_true.size() + self.when_false.size()

    def __str__(self) -> str:
        return (
            f"({self.indicator} {self.inequality.value} {self.threshold:.4g} "
            f"? {self.when_true} : {self.when_false})"
        )


Node = Union[DecisionNode, SignalNode]


@dataclass(frozen=True)
class NodeRef:
    """Location of a node: its parent and the parent attribute holding it."""
    node: Node
    parent: Optional[DecisionNode]
    slot: Optional[str]     # "when_true" / "when_false"; None for the root
    depth: int              # root is depth 1


def random_signal(rng: random.Random, exclude: Optional[Signal] = None) -> Signal:
    choices = [s for s in Signal if s is not exclude]
    return rng.choice(choices)


def random_threshold(rng: random.Random, indicator: Indicator) -> float:
    return rng.uniform(indicator.low, indicator.high)


def random_tree(
    rng: random.Random,
    indicators: Sequence[Indicator],
    depth: int,
    full: bool = False
) -> Node:
    """
    Build a random subtree no deeper than ``depth``.

    With ``full`` every branch reaches exactly ``depth``; otherwise branches
    stop early at random (the *grow* method).
    """
    if depth <= 1 or (not full and rng.random() < 0.3):
        return SignalNode(random_signal(rng))
    indicator = rng.choice(indicators)
    return DecisionNode(
        indicator=indicator.name,
        inequality=rng.choice(list(Inequality)),
        threshold=random_threshold(rng, indicator),
        when_true=random_tree(rng, indicators, depth - 1, full),
        when_false=random_tree(rng, indicators, depth - 1, full),
    )


def random_decision(rng: random.Random, indicators: Sequence[Indicator], depth: int) -> DecisionNode:
    """Random subtree of depth >= 2 and <= ``depth``, rooted at a decision."""
    indicator = rng.choice(indicators)
    return DecisionNode(
        indicator=indicator.name,
        inequality=rng.choice(list(Inequality)),
        threshold=random_threshold(rng, indicator),
        when_true=random_tree(rng, indicators, depth - 1),
        when_false=random_tree(rng, indicators, depth - 1),
    )


class TradingRuleTree:
    """Mutable wrapper around a rule's root node."""

    def __init__(self, root: Node, indicators: Sequence[Indicator], max_depth: int):
        self.root = root
        self.indicators = tuple(indicators)
        self.max_depth = max_depth

    @classmethod
    def generate(
        cls,
        rng: random.Random,
        indicators: Sequence[Indicator],
        depth: int,
        max_depth: int,
        full: bool = False
    ) -> "TradingRuleTree":
        depth = min(depth, max_depth)
        root: Node
        if depth < 2:
            root = SignalNode(random_signal(rng))
        elif full:
            root = random_tree(rng, indicators, depth, full=True)
        else:
            root = random_decision(rng, indicators, depth)
        return cls(root, indicators, max_depth)

    def evaluate(self, security: "Security", period: int) -> Signal:
        return self.root.evaluate(security, period)

    def depth(self) -> int:
        return self.root.depth()

    def size(self) -> int:
        return self.root.size()

    def iter_nodes(self) -> Iterator[NodeRef]:
        """Preorder traversal with parent links."""
        stack = [NodeRef(self.root, None, None, 1)]
        while stack:
            ref = stack.pop()
            yield ref
            if isinstance(ref.node, DecisionNode):
                stack.append(NodeRef(ref.node.when_false, ref.node, "when_false", ref.depth + 1))
                stack.append(NodeRef(ref.node.when_true, ref.node, "when_true", ref.depth + 1))

    def decisions(self) -> list[NodeRef]:
        return [ref for ref in self.iter_nodes() if isinstance(ref.node, DecisionNode)]

    def leaves(self) -> list[NodeRef]:
        return [ref for ref in self.iter_nodes() if isinstance(ref.node, SignalNode)]

    def replace(self, ref: NodeRef, node: Node) -> None:
        """Put ``node`` where ``ref`` points."""
        if ref.parent is None:
            self.root = node
        else:
            setattr(ref.parent, ref.slot, node)

    # Mutation operators

    def grow(self, rng: random.Random, grow_depth: int = 2) -> bool:
        """Replace a random leaf with a new decision subtree."""
        candidates = [ref for ref in self.leaves() if ref.depth < self.max_depth]
        if not candidates:
            return False
        ref = rng.choice(candidates)
        room = min(grow_depth, self.max_depth - ref.depth + 1)
        self.replace(ref, random_decision(rng, self.indicators, max(room, 2)))
        return True

    def truncate(self, rng: random.Random) -> bool:
        """Replace a random decision subtree with a leaf."""
        candidates = self.decisions()
        if not candidates:
            return False
        inner = [ref for ref in candidates if ref.parent is not None]
        ref = rng.choice(inner or candidates)
        self.replace(ref, SignalNode(random_signal(rng)))
        return True

    def swap_indicator(self, rng: random.Random) -> bool:
        """
        Point a random decision node at a different indicator.

        The threshold keeps its relative position within the indicator range.
        """
        candidates = self.decisions()
        if not candidates:
            return False
        node = rng.choice(candidates).node
        others = [ind for ind in self.indicators if ind.name != node.indicator]
        if not others:
            return False
        old = get_indicator(node.indicator)
        new = rng.choice(others)
        position = (node.threshold - old.low) / old.span if old.span else 0.5
        node.indicator = new.name
        node.threshold = new.low + position * new.span
        return True

    def replace_leaf(self, rng: random.Random) -> bool:
        """Change the signal of a random leaf."""
        ref = rng.choice(self.leaves())
        ref.node.signal = random_signal(rng, exclude=ref.node.signal)
        return True

    def flip_inequality(self, rng: random.Random) -> bool:
        """Invert the comparison of a random decision node."""
        candidates = self.decisions()
        if not candidates:
            return False
        node = rng.choice(candidates).node
        node.inequality = node.inequality.flipped()
        return True

    def perturb_threshold(self, rng: random.Random, scale: float = GAUSS_SCALE) -> bool:
        """Add Gaussian noise to the threshold of a random decision node."""
        candidates = self.decisions()
        if not candidates:
            return False
        node = rng.choice(candidates).node
        node.threshold += rng.gauss(0.0, scale * get_indicator(node.indicator).span)
        return True

    def __str__(self) -> str:
        return str(self.root)


def swap_subtrees(first: TradingRuleTree, second: TradingRuleTree, rng: random.Random) -> None:
    """Exchange a randomly chosen subtree between two trees, in place."""
    ref_a = rng.choice(list(first.iter_nodes()))
    ref_b = rng.choice(list(second.iter_nodes()))
    first.replace(ref_a, ref_b.node)
    second.replace(ref_b, ref_a.node)
