"""
Histograms of the current trait distribution of a population.

Every trait value ``v`` with bounds ``[lo, hi]`` goes to bin
``floor((v - lo) / (hi - lo) * N)`` of an ``N``-bin histogram. Indices are
clamped to ``[0, N-1]``: ``v == hi`` lands in the last bin and values that
drifted outside the range are counted in the nearest boundary bin, so the bins
always add up to the population size (or to 1 for densities).

Buffers belong to the caller and are overwritten in place. All checks run
before the first write, so a failed call leaves the buffer untouched.
"""

import logging
from collections.abc import Mapping, MutableSequence
from typing import Optional, Sequence, Tuple

import numpy as np

from .entities import Scan, SpeciesConfig
from .errors import (BufferShapeError, TraitDimensionError, TraitIndexError,
                     TraitValueError, UnknownSpeciesError)
from .registry import SpeciesRegistry
from .utils import bin_indices, square_side

logger = logging.getLogger(__name__)


def trait_reader(source):
    """Normalise a population accessor to ``read(species_id) -> trait vectors``.

    Accepts an object with ``current_trait_values(id)``, a mapping from id to
    trait vectors, or a plain callable.
    """
    if hasattr(source, "current_trait_values"):
        return source.current_trait_values
    if isinstance(source, Mapping):
        def read(species_id):
            try:
                return source[species_id]
            except KeyError:
                raise UnknownSpeciesError(species_id) from None
        return read
    if callable(source):
        return source
    raise TypeError(f"cannot read trait values from {type(source).__name__}")


def _is_writable(buf) -> bool:
    return isinstance(buf, np.ndarray) or isinstance(buf, MutableSequence)


def _holds_densities(buf) -> bool:
    return not isinstance(buf, np.ndarray) or np.issubdtype(buf.dtype, np.floating)


def _write(buf, values: np.ndarray) -> None:
    if isinstance(buf, np.ndarray):
        buf[...] = values.reshape(buf.shape)
    else:
        buf[:] = values.tolist()


class TraitHistogramBinner:
    def __init__(self, registry: SpeciesRegistry, source, scan: Scan = Scan.TRAIT1_ROWS,
                 normalized: bool = False):
        self.registry = registry
        self.read = trait_reader(source)
        self.scan = Scan(scan)
        self.normalized = normalized

    # ----- population snapshot -----

    def _traits(self, species_id: int, cfg: SpeciesConfig) -> np.ndarray:
        """Current trait values as an (N, n_traits) float array."""
        n = cfg.n_traits
        try:
            arr = np.asarray(self.read(species_id), dtype=float)
        except ValueError as e:
            raise TraitDimensionError(f"{cfg.name}: trait vectors are not rectangular ({e})") from e
        if arr.size == 0:
            return np.empty((0, n))
        if arr.ndim == 1 and n == 1:
            arr = arr.reshape(-1, 1)
        if arr.ndim != 2 or arr.shape[1] != n:
            raise TraitDimensionError(f"{cfg.name}: expected trait vectors of length {n}, got shape {arr.shape}")
        if np.isnan(arr).any():
            raise TraitValueError(f"{cfg.name}: {int(np.isnan(arr).sum())} trait values are NaN")
        return arr

    def _bin(self, cfg: SpeciesConfig, values: np.ndarray, trait: int, n: int) -> np.ndarray:
        lo, hi = cfg.trait_min[trait], cfg.trait_max[trait]
        outside = int(np.count_nonzero((values < lo) | (values > hi)))
        if outside:
            logger.debug("%s: clamped %d values of %s outside [%g, %g]",
                         cfg.name, outside, cfg.trait_names[trait], lo, hi)
        return bin_indices(values, lo, hi, n)

    def _normalized(self, normalized: Optional[bool]) -> bool:
        return self.normalized if normalized is None else bool(normalized)

    def _check_densities(self, cfg: SpeciesConfig, buf, normalized: Optional[bool]) -> None:
        if self._normalized(normalized) and not _holds_densities(buf):
            raise BufferShapeError(f"{cfg.name}: densities need a floating point buffer, got {buf.dtype}")

    def _scale(self, normalized: Optional[bool], size: int) -> float:
        return 1.0 / size if self._normalized(normalized) and size > 0 else 1.0

    # ----- 1D -----

    def trait_histogram(self, species_id: int, bins: Sequence, normalized: Optional[bool] = None):
        """Fill ``bins[t]`` with the histogram of trait ``t``, for every trait.

        Each row may have its own number of bins. Densities need floating
        point rows when the buffer is a numpy array. Returns ``bins``.
        """
        cfg = self.registry.get(species_id)
        if isinstance(bins, np.ndarray) and bins.ndim != 2:
            raise BufferShapeError(f"{cfg.name}: expected a 2D buffer (traits x bins), got {bins.ndim}D")
        if len(bins) != cfg.n_traits:
            raise BufferShapeError(f"{cfg.name}: expected {cfg.n_traits} histogram rows, got {len(bins)}")
        for t, row in enumerate(bins):
            if not _is_writable(row) or (isinstance(row, np.ndarray) and row.ndim != 1):
                raise BufferShapeError(f"{cfg.name}: row {t} is not a writable 1D buffer")
            if len(row) < 1:
                raise BufferShapeError(f"{cfg.name}: row {t} has no bins")
            self._check_densities(cfg, row, normalized)

        traits = self._traits(species_id, cfg)
        scale = self._scale(normalized, len(traits))
        hists = []
        for t, row in enumerate(bins):
            n = len(row)
            idx = self._bin(cfg, traits[:, t], t, n)
            hists.append(np.bincount(idx, minlength=n).astype(float) * scale)
        for row, hist in zip(bins, hists):
            _write(row, hist)
        return bins

    # ----- 2D -----

    def _layout(self, cfg: SpeciesConfig, length: int, shape: Optional[Tuple[int, int]]) -> Tuple[int, int]:
        if shape is None:
            side = square_side(length)
            if side < 1:
                raise BufferShapeError(f"{cfg.name}: buffer of length {length} is not a square lattice")
            return side, side
        rows, cols = (int(s) for s in shape)
        if rows < 1 or cols < 1 or rows * cols != length:
            raise BufferShapeError(f"{cfg.name}: shape {rows}x{cols} does not fit a buffer of length {length}")
        return rows, cols

    def _check_trait(self, cfg: SpeciesConfig, trait) -> int:
        if isinstance(trait, bool) or not isinstance(trait, (int, np.integer)) or not 0 <= trait < cfg.n_traits:
            raise TraitIndexError(f"{cfg.name}: trait {trait!r} out of range [0, {cfg.n_traits})")
        return int(trait)

    def trait_2d_histogram(self, species_id: int, bins, trait1: int = 0, trait2: int = 1,
                           shape: Optional[Tuple[int, int]] = None, normalized: Optional[bool] = None):
        """Joint histogram of ``trait1`` and ``trait2`` in a flat lattice buffer.

        Cell ``(row, col)`` is stored at ``row * cols + col``. With the default
        scan order rows follow ``trait1`` and columns ``trait2``. Without
        ``shape`` the buffer must hold a square lattice. A 2D numpy buffer
        supplies its own shape.

        For single-trait species ``trait1`` and ``trait2`` are ignored and the
        buffer holds the plain histogram of that trait as an N x 1 lattice.
        """
        cfg = self.registry.get(species_id)
        if not _is_writable(bins):
            raise BufferShapeError(f"{cfg.name}: 2D histogram buffer is not writable")
        if isinstance(bins, np.ndarray):
            if bins.ndim == 2 and shape is None:
                shape = bins.shape
            elif bins.ndim == 2 and tuple(int(s) for s in shape) != bins.shape:
                raise BufferShapeError(f"{cfg.name}: shape {tuple(shape)} disagrees with buffer shape {bins.shape}")
            elif bins.ndim not in (1, 2):
                raise BufferShapeError(f"{cfg.name}: expected a flat buffer, got {bins.ndim}D")
            length = bins.size
        else:
            length = len(bins)
        if length < 1:
            raise BufferShapeError(f"{cfg.name}: 2D histogram buffer is empty")
        self._check_densities(cfg, bins, normalized)

        if cfg.n_traits == 1:
            if shape is not None:
                rows, cols = self._layout(cfg, length, shape)
                if rows != 1 and cols != 1:
                    raise BufferShapeError(
                        f"{cfg.name}: single trait needs an N x 1 or 1 x N layout, got {rows}x{cols}")
            traits = self._traits(species_id, cfg)
            idx = self._bin(cfg, traits[:, 0], 0, length)
            hist = np.bincount(idx, minlength=length).astype(float) * self._scale(normalized, len(traits))
            _write(bins, hist)
            return bins

        t1 = self._check_trait(cfg, trait1)
        t2 = self._check_trait(cfg, trait2)
        rows, cols = self._layout(cfg, length, shape)
        if self.scan is Scan.TRAIT2_ROWS:
            t1, t2 = t2, t1
        traits = self._traits(species_id, cfg)
        r = self._bin(cfg, traits[:, t1], t1, rows)
        c = self._bin(cfg, traits[:, t2], t2, cols)
        hist = np.bincount(r * cols + c, minlength=rows * cols).astype(float) * self._scale(normalized, len(traits))
        _write(bins, hist)
        return bins
