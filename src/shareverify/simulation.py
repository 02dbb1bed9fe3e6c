"""Monte Carlo simulation of share forgery against majority-vote resolution.

Compares empirical recovery/detection rates with the bounds in
shareverify.analysis.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

import numpy as np

from shareverify.errors import NoConsistentSecretError
from shareverify.models import ResolutionOutcome, Share, ThresholdParams
from shareverify.resolver import ConsistencyResolver
from shareverify.sharing import IntegerSecretSharing


@dataclass
class SimulationResult:
    """Aggregated results from a Monte Carlo simulation run.

    Attributes:
        n_trials: Number of simulation trials.
        n_recovered: Trials where the resolved secret was the dealt one.
        n_detected: Trials where fake_ids matched the forged set exactly.
        n_unresolved: Trials where no subset was consistent.
        recovery_rate: Empirical P[secret recovered].
        detection_rate: Empirical P[forgers identified exactly].
        avg_forged: Mean number of forged shares per trial.
    """

    n_trials: int
    n_recovered: int
    n_detected: int
    n_unresolved: int
    recovery_rate: float
    detection_rate: float
    avg_forged: float


@dataclass
class TrialOutcome:
    """Outcome of a single simulation trial."""

    shares: list[Share]
    forged_ids: frozenset[str]
    resolution: ResolutionOutcome | None
    original_secret: int

    @property
    def recovered(self) -> bool:
        return (
            self.resolution is not None
            and self.resolution.secret == self.original_secret
        )

    @property
    def detected(self) -> bool:
        return (
            self.resolution is not None
            and self.resolution.fake_ids == self.forged_ids
        )


class ForgerySimulator:
    """Deal shares, forge some of them at random and resolve.

    Args:
        n: Shares per trial.
        k: Reconstruction threshold.
        p_forge: Independent probability that a share is forged.
        coeff_bound: Coefficient and forgery offset bound.
        seed: RNG seed for reproducibility.
        resolver: Resolver to use (sequential by default).
    """

    def __init__(
        self,
        n: int,
        k: int,
        p_forge: float = 0.1,
        coeff_bound: int = 1000,
        seed: int | None = None,
        resolver: ConsistencyResolver | None = None,
    ) -> None:
        if not 0.0 <= p_forge <= 1.0:
            raise ValueError(f"p_forge must be in [0, 1], got {p_forge}")
        self.params = ThresholdParams(n=n, k=k)
        self.p_forge = p_forge
        self.coeff_bound = coeff_bound
        self.rng = random.Random(seed)
        self.sss = IntegerSecretSharing(coeff_bound, rng=self.rng)
        self.resolver = resolver or ConsistencyResolver()

    def simulate_trial(self, secret: int | None = None) -> TrialOutcome:
        """Run a single deal-forge-resolve trial."""
        if secret is None:
            secret = self.rng.randint(-self.coeff_bound, self.coeff_bound)

        shares = self.sss.share(secret, self.params.n, self.params.k)
        forged: set[str] = set()
        received: list[Share] = []
        for share in shares:
            if self.rng.random() < self.p_forge:
                offset = self.rng.randint(1, self.coeff_bound)
                share = Share(
                    y=share.y + self.rng.choice((-offset, offset)),
                    x=share.x,
                    id=share.id,
                )
                forged.add(str(share.id))
            received.append(share)

        try:
            resolution = self.resolver.resolve(received, self.params.k)
        except NoConsistentSecretError:
            resolution = None

        return TrialOutcome(
            shares=received,
            forged_ids=frozenset(forged),
            resolution=resolution,
            original_secret=secret,
        )

    def run(self, n_trials: int = 1000) -> SimulationResult:
        """Run multiple trials and aggregate results."""
        if n_trials < 1:
            raise ValueError(f"n_trials must be >= 1, got {n_trials}")

        outcomes = [self.simulate_trial() for _ in range(n_trials)]
        recovered = np.array([o.recovered for o in outcomes])
        detected = np.array([o.detected for o in outcomes])
        forged = np.array([len(o.forged_ids) for o in outcomes])
        unresolved = sum(1 for o in outcomes if o.resolution is None)

        return SimulationResult(
            n_trials=n_trials,
            n_recovered=int(recovered.sum()),
            n_detected=int(detected.sum()),
            n_unresolved=unresolved,
            recovery_rate=float(recovered.mean()),
            detection_rate=float(detected.mean()),
            avg_forged=float(forged.mean()),
        )
