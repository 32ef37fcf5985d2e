"""
Reduction records: one applied rule, and the ordered log of them.

A ReductionTrace is a serializable account of what happened at each
step of a normalization.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..core.terms import term_to_dict


@dataclass(frozen=True)
class ReductionStep:
    """before ->[rule] after, plus whatever the rule wants to record."""
    rule: str
    before: object
    after: object
    details: dict = field(default_factory=dict, compare=False, hash=False)

    @property
    def name(self):
        return f"{self.before.name} →[{self.rule}] {self.after.name}"

    def innermost(self) -> "ReductionStep":
        """Follow contextual steps down to the primitive rule that fired."""
        step = self
        while "inner_step" in step.details:
            step = step.details["inner_step"]
        return step

    def to_dict(self) -> dict:
        details = {k: v for k, v in self.details.items() if k != "inner_step"}
        if "inner_step" in self.details:
            details["inner_rule"] = self.innermost().rule
        return {
            "rule": self.rule,
            "before": term_to_dict(self.before),
            "after": term_to_dict(self.after),
            "details": details,
        }

    def __repr__(self):
        return f"ReductionStep({self.name})"


@dataclass
class ReductionTrace:
    """
    Every step from an initial term to its normal form.

    final stays None until the reduction reaches a term with no
    applicable rule.
    """
    initial: object
    steps: list = field(default_factory=list)
    final: Optional[object] = None

    def add_step(self, step: ReductionStep):
        self.steps.append(step)

    @property
    def length(self):
        return len(self.steps)

    @property
    def normalized(self):
        return self.final is not None

    @property
    def terms(self) -> list:
        """initial, then the after-term of every step."""
        return [self.initial] + [s.after for s in self.steps]

    @property
    def rules(self) -> list:
        return [s.rule for s in self.steps]

    def to_dict(self) -> dict:
        return {
            "initial": term_to_dict(self.initial),
            "steps": [s.to_dict() for s in self.steps],
            "final": term_to_dict(self.final) if self.final is not None else None,
            "normalized": self.normalized,
        }

    def __len__(self):
        return len(self.steps)
