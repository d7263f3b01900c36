"""
Separable payoff functions for continuous traits.

The payoff of an individual with trait vector ``me`` interacting with a partner
holding ``you`` is the sum over traits of benefit minus cost:

    payoff(me, you) = sum_t B_t(me[t], you[t]) - C_t(me[t], you[t]) + offset

Trait values are taken in their natural units (within the configured trait
range), not rescaled to [0, 1].
"""

import math
from enum import Enum
from typing import Sequence

from .errors import ConfigurationError


class Costs(Enum):
    # me: cost depends on own investment only
    ME_LINEAR = ("0", "C(x,y)=c0*x", 1)
    ME_QUAD = ("1", "C(x,y)=c0*x+c1*x^2", 2)
    ME_SQRT = ("2", "C(x,y)=c0*sqrt(x)", 1)
    ME_LOG = ("3", "C(x,y)=c0*ln(c1*x+1)", 2)
    ME_EXP = ("4", "C(x,y)=c0*(1-exp(-c1*x))", 2)
    # we: cost depends on joint investment
    WE_LINEAR = ("10", "C(x,y)=c0*(x+y)", 1)
    WE_QUAD = ("11", "C(x,y)=c0*(x+y)+c1*(x+y)^2", 2)
    WE_CUBIC = ("12", "C(x,y)=c0*(x+y)+c1*(x+y)^2+c2*(x+y)^3", 3)
    WE_QUARTIC = ("13", "C(x,y)=c0*(x+y)+c1*(x+y)^2+c2*(x+y)^3+c3*(x+y)^4", 4)
    MEYOU_LINEAR = ("20", "C(x,y)=c0*x+c1*y+c2*x*y", 3)

    def __init__(self, key, title, n_params):
        self.key = key
        self.title = title
        self.n_params = n_params

    def __str__(self):
        return f"{self.key}: {self.title}"

    def evaluate(self, c: Sequence[float], me: float, you: float) -> float:
        return _COSTS[self](c, me, you, me + you)


class Benefits(Enum):
    # you: benefit provided by the partner's investment
    YOU_LINEAR = ("0", "B(x,y)=b0*y", 1)
    YOU_QUAD = ("1", "B(x,y)=b0*y+b1*y^2", 2)
    YOU_SQRT = ("2", "B(x,y)=b0*sqrt(y)", 1)
    YOU_LOG = ("3", "B(x,y)=b0*ln(b1*y+1)", 2)
    YOU_EXP = ("4", "B(x,y)=b0*(1-exp(-b1*y))", 2)
    # we: benefit from the joint investment
    WE_LINEAR = ("10", "B(x,y)=b0*(x+y)", 1)
    WE_QUAD = ("11", "B(x,y)=b0*(x+y)+b1*(x+y)^2", 2)
    WE_SQRT = ("12", "B(x,y)=b0*sqrt(x+y)", 1)
    WE_LOG = ("13", "B(x,y)=b0*ln(b1*(x+y)+1)", 2)
    WE_EXP = ("14", "B(x,y)=b0*(1-exp(-b1*(x+y)))", 2)
    MEYOU_LINEAR = ("20", "B(x,y)=b0*x+b1*y+b2*x*y", 3)
    # me: benefit from own investment
    ME_LINEAR = ("30", "B(x,y)=b0*x", 1)
    ME_QUAD = ("31", "B(x,y)=b0*x+b1*x^2", 2)
    ME_CUBIC = ("32", "B(x,y)=b0*x+b1*x^2+b2*x^3", 3)

    def __init__(self, key, title, n_params):
        self.key = key
        self.title = title
        self.n_params = n_params

    def __str__(self):
        return f"{self.key}: {self.title}"

    def evaluate(self, b: Sequence[float], me: float, you: float) -> float:
        return _BENEFITS[self](b, me, you, me + you)


_COSTS = {
    Costs.ME_LINEAR: lambda c, x, y, s: c[0] * x,
    Costs.ME_QUAD: lambda c, x, y, s: x * (c[1] * x + c[0]),
    Costs.ME_SQRT: lambda c, x, y, s: c[0] * math.sqrt(x),
    Costs.ME_LOG: lambda c, x, y, s: c[0] * math.log(c[1] * x + 1.0),
    Costs.ME_EXP: lambda c, x, y, s: c[0] * (1.0 - math.exp(-c[1] * x)),
    Costs.WE_LINEAR: lambda c, x, y, s: c[0] * s,
    Costs.WE_QUAD: lambda c, x, y, s: (c[1] * s + c[0]) * s,
    Costs.WE_CUBIC: lambda c, x, y, s: ((c[2] * s + c[1]) * s + c[0]) * s,
    Costs.WE_QUARTIC: lambda c, x, y, s: (((c[3] * s + c[2]) * s + c[1]) * s + c[0]) * s,
    Costs.MEYOU_LINEAR: lambda c, x, y, s: c[0] * x + c[1] * y + c[2] * x * y,
}

_BENEFITS = {
    Benefits.YOU_LINEAR: lambda b, x, y, s: b[0] * y,
    Benefits.YOU_QUAD: lambda b, x, y, s: (b[1] * y + b[0]) * y,
    Benefits.YOU_SQRT: lambda b, x, y, s: b[0] * math.sqrt(y),
    Benefits.YOU_LOG: lambda b, x, y, s: b[0] * math.log(b[1] * y + 1.0),
    Benefits.YOU_EXP: lambda b, x, y, s: b[0] * (1.0 - math.exp(-b[1] * y)),
    Benefits.WE_LINEAR: lambda b, x, y, s: b[0] * s,
    Benefits.WE_QUAD: lambda b, x, y, s: (b[1] * s + b[0]) * s,
    Benefits.WE_SQRT: lambda b, x, y, s: b[0] * math.sqrt(s),
    Benefits.WE_LOG: lambda b, x, y, s: b[0] * math.log(b[1] * s + 1.0),
    Benefits.WE_EXP: lambda b, x, y, s: b[0] * (1.0 - math.exp(-b[1] * s)),
    Benefits.MEYOU_LINEAR: lambda b, x, y, s: b[0] * x + b[1] * y + b[2] * x * y,
    Benefits.ME_LINEAR: lambda b, x, y, s: b[0] * x,
    Benefits.ME_QUAD: lambda b, x, y, s: (b[1] * x + b[0]) * x,
    Benefits.ME_CUBIC: lambda b, x, y, s: ((b[2] * x + b[1]) * x + b[0]) * x,
}


def _pad(params: Sequence[float], n: int) -> tuple:
    """Repeat ``params`` cyclically to exactly ``n`` entries."""
    if not params:
        raise ConfigurationError("payoff function needs at least one parameter")
    return tuple(float(params[i % len(params)]) for i in range(n))


class TraitPayoff:
    """Payoff as a sum of per-trait benefit and cost functions."""

    def __init__(self, costs: Sequence[Costs], cost_params: Sequence[Sequence[float]],
                 benefits: Sequence[Benefits], benefit_params: Sequence[Sequence[float]],
                 offset: float = 0.0):
        n = len(costs)
        if n == 0 or not (len(benefits) == len(cost_params) == len(benefit_params) == n):
            raise ConfigurationError(
                "costs, benefits and their parameters need one entry per trait "
                f"(got {len(costs)}, {len(benefits)}, {len(cost_params)}, {len(benefit_params)})")
        self.n_traits = n
        self.costs = tuple(Costs(c) for c in costs)
        self.benefits = tuple(Benefits(b) for b in benefits)
        self.ci = tuple(_pad(p, c.n_params) for p, c in zip(cost_params, self.costs))
        self.bi = tuple(_pad(p, b.n_params) for p, b in zip(benefit_params, self.benefits))
        self.offset = float(offset)

    @classmethod
    def constant(cls, value: float, n_traits: int = 1) -> "TraitPayoff":
        """Trait-independent payoff; every interaction yields ``value``."""
        return cls([Costs.ME_LINEAR] * n_traits, [(0.0,)] * n_traits,
                   [Benefits.ME_LINEAR] * n_traits, [(0.0,)] * n_traits, offset=value)

    def __call__(self, me: Sequence[float], you: Sequence[float]) -> float:
        return self.benefit(me, you) - self.cost(me, you) + self.offset

    def cost(self, me: Sequence[float], you: Sequence[float]) -> float:
        return sum(c.evaluate(p, float(me[t]), float(you[t]))
                   for t, (c, p) in enumerate(zip(self.costs, self.ci)))

    def benefit(self, me: Sequence[float], you: Sequence[float]) -> float:
        return sum(b.evaluate(p, float(me[t]), float(you[t]))
                   for t, (b, p) in enumerate(zip(self.benefits, self.bi)))

    def __repr__(self):
        return (f"TraitPayoff(costs={[f'{c.name} ({c})' for c in self.costs]}, "
                f"benefits={[f'{b.name} ({b})' for b in self.benefits]}, offset={self.offset})")
