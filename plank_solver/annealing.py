# plank_solver/annealing.py
# Simulated annealing over cut sequences.
#
# The decision variable is a *sequence*: the order in which cuts are fed to the
# greedy packer plus a preferred rotation flag per cut. Each sequence is scored by
# running the packer:
#   fitness = sum(plank waste area) + unplaced_penalty * len(unplaced)
# so placing one more cut always dominates any waste reduction.
#
# Restarts are independent (own seed = base_seed + restart index, own state) and can
# run on a thread pool; the lowest fitness wins, ties go to the lowest restart index,
# so the outcome does not depend on the number of workers.

from __future__ import annotations

import math
import time
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from .config import DEFAULTS, SAConfig
from .logger import get_logger
from .packer import PackResult, pack
from .rng import Lcg
from .types import UnitCut, UnitStock

MOVE_SWAP = 0
MOVE_REVERSE = 1
MOVE_FLIP = 2


class CancelToken(Protocol):
    def is_set(self) -> bool: ...


@dataclass(frozen=True)
class SequenceEntry:
    uid: str
    rotated: bool


CutSequence = Tuple[SequenceEntry, ...]


@dataclass(frozen=True)
class Evaluation:
    sequence: CutSequence
    fitness: float
    pack: PackResult


@dataclass(frozen=True)
class RestartOutcome:
    index: int
    seed: int
    best: Evaluation
    iterations_run: int
    uphill_accepted: int = 0


@dataclass(frozen=True)
class SearchOutcome:
    best: Evaluation
    seed: int
    restarts: Tuple[RestartOutcome, ...]
    iteration_budget: int

    @property
    def stopped_early(self) -> bool:
        """True if cancellation or the deadline cut any restart short."""
        return any(r.iterations_run < self.iteration_budget for r in self.restarts)


# ----------------------------
# Sequence operators
# ----------------------------

def random_sequence(cuts: Sequence[UnitCut], rng: Lcg) -> CutSequence:
    """Shuffled cut order, each with a uniformly random preferred rotation."""
    uids = [c.uid for c in cuts]
    rng.shuffle(uids)
    return tuple(SequenceEntry(uid=u, rotated=rng.random() < 0.5) for u in uids)


def _two_positions(n: int, rng: Lcg) -> Tuple[int, int]:
    i = rng.randint(0, n - 1)
    j = rng.randint(0, n - 2)
    if j >= i:
        j += 1
    return (i, j) if i < j else (j, i)


def neighbor(sequence: CutSequence, rng: Lcg) -> CutSequence:
    """
    Perturbed copy of the sequence; the move is chosen uniformly:
      swap two positions, reverse a sub-range (2-opt), or flip one rotation flag.
    Sequences shorter than 2 can only be flipped.
    """
    n = len(sequence)
    if n == 0:
        return sequence

    move = rng.randint(0, 2)
    if n < 2:
        move = MOVE_FLIP

    seq = list(sequence)
    if move == MOVE_SWAP:
        i, j = _two_positions(n, rng)
        seq[i], seq[j] = seq[j], seq[i]
    elif move == MOVE_REVERSE:
        i, j = _two_positions(n, rng)
        seq[i:j + 1] = reversed(seq[i:j + 1])
    else:
        k = rng.randint(0, n - 1)
        seq[k] = SequenceEntry(uid=seq[k].uid, rotated=not seq[k].rotated)
    return tuple(seq)


def temperature(iteration: int, config: SAConfig) -> float:
    """Geometric decay from start_temperature (first step) to end_temperature (last step)."""
    t0, t1 = config.start_temperature, config.end_temperature
    if config.iterations <= 1:
        return t0
    return t0 * (t1 / t0) ** (iteration / (config.iterations - 1))


def fitness(result: PackResult, unplaced_penalty: float) -> float:
    return result.waste_area() + unplaced_penalty * len(result.unplaced)


# ----------------------------
# Scoring
# ----------------------------

class SequenceEvaluator:
    """
    Scores sequences by running the packer. Keeps the max_entries most recently
    used packings, so revisited states cost nothing. One instance per restart
    (not shared across threads).
    """

    def __init__(
        self,
        stock_units: Sequence[UnitStock],
        cuts: Sequence[UnitCut],
        config: SAConfig,
        max_entries: int = DEFAULTS.default_cache_size,
    ) -> None:
        self.stock_units = tuple(stock_units)
        self.cuts_by_uid: Dict[str, UnitCut] = {c.uid: c for c in cuts}
        self.config = config
        self.max_entries = max_entries
        self._cache: "OrderedDict[CutSequence, Evaluation]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._cache)

    def __call__(self, sequence: CutSequence) -> Evaluation:
        hit = self._cache.get(sequence)
        if hit is not None:
            self._cache.move_to_end(sequence)
            return hit
        ordered = [self.cuts_by_uid[e.uid] for e in sequence]
        hints = {e.uid: e.rotated for e in sequence}
        result = pack(
            self.stock_units,
            ordered,
            hints,
            kerf=self.config.kerf_thickness,
            tolerance=self.config.position_tolerance,
        )
        ev = Evaluation(sequence=sequence, fitness=fitness(result, self.config.unplaced_penalty), pack=result)
        self._cache[sequence] = ev
        if len(self._cache) > self.max_entries:
            self._cache.popitem(last=False)
        return ev


def accept(current: float, candidate: float, t: float, rng: Lcg) -> bool:
    """Metropolis rule: always take an improvement, a worse candidate with probability exp(-delta / T)."""
    if candidate < current:
        return True
    return rng.random() < math.exp((current - candidate) / t)


def _should_stop(deadline: Optional[float], cancel: Optional[CancelToken]) -> bool:
    if cancel is not None and cancel.is_set():
        return True
    return deadline is not None and time.monotonic() >= deadline


# ----------------------------
# Annealing
# ----------------------------

def anneal(
    stock_units: Sequence[UnitStock],
    cuts: Sequence[UnitCut],
    config: SAConfig,
    seed: int,
    *,
    index: int = 0,
    deadline: Optional[float] = None,
    cancel: Optional[CancelToken] = None,
) -> RestartOutcome:
    """
    One annealing run from a fresh random sequence.

    Each iteration proposes neighbors_per_iteration neighbors of the current
    sequence and keeps the best of the batch. It replaces the current sequence if
    it is better, or with Metropolis probability exp((current - candidate) / T).
    The best sequence seen is tracked independently of acceptance.
    Cancellation is polled once per iteration; the best-so-far is returned.
    """
    rng = Lcg(seed)
    evaluate = SequenceEvaluator(stock_units, cuts, config)

    current = evaluate(random_sequence(cuts, rng))
    best = current

    done = 0
    uphill = 0
    for i in range(config.iterations):
        if _should_stop(deadline, cancel):
            break
        t = temperature(i, config)

        batch = [evaluate(neighbor(current.sequence, rng)) for _ in range(config.neighbors_per_iteration)]
        candidate = min(batch, key=lambda e: e.fitness)  # first of equals wins

        if accept(current.fitness, candidate.fitness, t, rng):
            if candidate.fitness > current.fitness:
                uphill += 1
            current = candidate

        if candidate.fitness < best.fitness:
            best = candidate
        done += 1

    return RestartOutcome(index=index, seed=seed, best=best, iterations_run=done, uphill_accepted=uphill)


def search(
    stock_units: Sequence[UnitStock],
    cuts: Sequence[UnitCut],
    config: SAConfig,
    seed: int,
    *,
    cancel: Optional[CancelToken] = None,
) -> SearchOutcome:
    """
    random_restarts + 1 independent annealing runs; the lowest fitness wins.
    With config.workers > 1 the restarts run on a thread pool.
    """
    log = get_logger()
    deadline = time.monotonic() + config.time_limit_s if config.time_limit_s is not None else None

    n_restarts = config.random_restarts + 1
    seeds = [(seed + r) & 0xFFFFFFFF for r in range(n_restarts)]

    if not cuts:
        # Nothing to order: a single (empty) packing is the answer.
        empty = SequenceEvaluator(stock_units, cuts, config)(())
        outcome = RestartOutcome(index=0, seed=seeds[0], best=empty, iterations_run=config.iterations)
        return SearchOutcome(best=empty, seed=seed, restarts=(outcome,), iteration_budget=config.iterations)

    if config.workers > 1 and n_restarts > 1:
        with ThreadPoolExecutor(max_workers=min(config.workers, n_restarts)) as ex:
            futures = [
                ex.submit(anneal, stock_units, cuts, config, s, index=r, deadline=deadline, cancel=cancel)
                for r, s in enumerate(seeds)
            ]
            outcomes: List[RestartOutcome] = [f.result() for f in futures]
    else:
        outcomes = [
            anneal(stock_units, cuts, config, s, index=r, deadline=deadline, cancel=cancel)
            for r, s in enumerate(seeds)
        ]

    winner = outcomes[0]
    for o in outcomes:
        log.info(
            f"restart {o.index + 1}/{n_restarts}: seed={o.seed} iterations={o.iterations_run} uphill={o.uphill_accepted} "
            f"fitness={o.best.fitness:,.1f} unplaced={len(o.best.pack.unplaced)}"
        )
        if o.best.fitness < winner.best.fitness:
            winner = o

    log.info(
        f"best restart {winner.index + 1}: fitness={winner.best.fitness:,.1f} "
        f"planks={len(winner.best.pack.bins)} unplaced={len(winner.best.pack.unplaced)}"
    )
    return SearchOutcome(best=winner.best, seed=seed, restarts=tuple(outcomes), iteration_budget=config.iterations)
