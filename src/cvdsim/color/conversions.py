"""
conversions.py
--------------

sRGB <-> linear-light transfer functions.

Includes:
- srgb_to_linear : decode a gamma-encoded sRGB channel to linear intensity.
- linear_to_srgb : encode linear intensity back to sRGB.

All functions use JAX (jax.numpy) so they can be traced inside the
vectorized transform kernel.

Notes
-----
- Inputs are normalized channel values (0..1). Neither function clamps:
  values outside [0, 1] are evaluated with the same piecewise formula.
- Negative inputs always fall into the linear segment of linear_to_srgb,
  so no fractional power of a negative number is taken.
- cvdsim enables jax_enable_x64 on import; results are float64.

Examples
--------
>>> from cvdsim.color.conversions import linear_to_srgb, srgb_to_linear
>>> round(float(linear_to_srgb(srgb_to_linear(0.5))), 6)
0.5
"""

from __future__ import annotations

import jax.numpy as jnp

# Breakpoints of the piecewise sRGB curve (IEC 61966-2-1)
SRGB_THRESHOLD = 0.04045
LINEAR_THRESHOLD = 0.0031308
_A = 0.055
_GAMMA = 2.4
_SLOPE = 12.92


def srgb_to_linear(c) -> jnp.ndarray:
    """
    Convert normalized sRGB channel values to linear RGB.

    Parameters
    ----------
    c : float or array-like
        sRGB value(s), nominally in [0, 1].

    Returns
    -------
    jnp.ndarray
        Linear-light value(s), same shape as ``c``.

    Notes
    -----
    - c <= 0.04045 : c / 12.92
    - otherwise    : ((c + 0.055) / 1.055) ** 2.4
    """
    c = jnp.asarray(c)
    c = c.astype(jnp.result_type(c, 0.0))
    # keep the power's base positive on the branch that jnp.where discards
    safe = jnp.maximum(c, SRGB_THRESHOLD)
    return jnp.where(
        c <= SRGB_THRESHOLD,
        c / _SLOPE,
        jnp.power((safe + _A) / (1.0 + _A), _GAMMA),
    )


def linear_to_srgb(c) -> jnp.ndarray:
    """
    Convert linear RGB channel values to normalized sRGB.

    Inverse of :func:`srgb_to_linear`.

    Parameters
    ----------
    c : float or array-like
        Linear-light value(s), nominally in [0, 1]. Values produced by a
        transformation matrix may fall outside this range.

    Returns
    -------
    jnp.ndarray
        sRGB value(s), same shape as ``c``.

    Notes
    -----
    - c <= 0.0031308 : 12.92 * c
    - otherwise      : 1.055 * c ** (1 / 2.4) - 0.055
    """
    c = jnp.asarray(c)
    c = c.astype(jnp.result_type(c, 0.0))
    safe = jnp.maximum(c, LINEAR_THRESHOLD)
    return jnp.where(
        c <= LINEAR_THRESHOLD,
        _SLOPE * c,
        (1.0 + _A) * jnp.power(safe, 1.0 / _GAMMA) - _A,
    )
