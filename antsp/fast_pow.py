"""Power functions used when scoring candidate towns.

``approx_pow`` is the classic high-word bit trick: the exponent field of an
IEEE-754 double grows with log2 of the value, so scaling the upper 32 bits
(minus the bias of 1.0) by ``exponent`` approximates ``base ** exponent``.
Errors of up to ~25% are harmless for a stochastic search. Results stay
monotone in ``base`` for a positive exponent and in ``exponent`` for
``base > 1``.

With numpy the trick only pays off for scalars and large arrays; the
candidate rows scored per step are short, so ``exact_pow`` is the default.
"""
from __future__ import annotations
import struct
from typing import Callable, Union

import numpy as np

ArrayLike = Union[float, np.ndarray]

# high word of 1.0 (0x3FF00000) shifted by the usual error-balancing correction
_ONE_HIGH_WORD = 1072632447
# largest high word that is still a finite, non-negative double
_MAX_HIGH_WORD = 0x7FEFFFFF

_DOUBLE = struct.Struct("<d")
_INT64 = struct.Struct("<q")


def approx_pow(base: ArrayLike, exponent: float) -> ArrayLike:
    if np.ndim(base) == 0:
        high = _INT64.unpack(_DOUBLE.pack(base))[0] >> 32
        y = int(exponent * (high - _ONE_HIGH_WORD) + _ONE_HIGH_WORD)
        # clamp instead of wrapping into the sign bit or the inf/nan range
        y = min(max(y, 0), _MAX_HIGH_WORD)
        return _DOUBLE.unpack(_INT64.pack(y << 32))[0]

    a = np.ascontiguousarray(base, dtype=np.float64)
    y = ((a.view(np.int64) >> 32) - _ONE_HIGH_WORD) * exponent
    y += _ONE_HIGH_WORD
    np.clip(y, 0, _MAX_HIGH_WORD, out=y)
    out = y.astype(np.int64)
    out <<= 32
    return out.view(np.float64)


def exact_pow(base: ArrayLike, exponent: float) -> ArrayLike:
    out = np.power(base, exponent, dtype=np.float64)
    if np.ndim(base) == 0:
        return float(out)
    return out


def power_function(fast: bool) -> Callable[[ArrayLike, float], ArrayLike]:
    return approx_pow if fast else exact_pow
