import numpy as np
import numba
from enum import IntEnum

# Display precision, matches a "0.##" number format
DEFAULT_DECIMALS = 2


class TermType(IntEnum):
  CONSTANT = 0
  POWER = 1


def format_number(value, decimals: int = DEFAULT_DECIMALS) -> str:
  """Format a float with at most `decimals` decimals and no trailing zeros"""
  value = float(value)
  if np.isnan(value):
    return "NaN"
  if np.isinf(value):
    return "inf" if value > 0 else "-inf"
  text = f"{value:.{decimals}f}"
  if '.' in text:
    text = text.rstrip('0').rstrip('.')
  if text in ('-0', ''):
    text = '0'
  return text


def signed(text: str) -> str:
  return text if text.startswith('-') else f"+{text}"


@numba.njit(cache=True, fastmath=False)
def evaluate_terms_batch(coefficients, powers, bases):
  """Sum coefficient * base ** power over terms for every sample.

  bases has shape (n_samples, n_terms); constant terms carry base 1, power 0.
  """
  n_samples = bases.shape[0]
  out = np.zeros(n_samples, dtype=np.float64)
  for j in range(coefficients.shape[0]):
    out += coefficients[j] * np.power(bases[:, j], powers[j])
  return out


def evaluate_terms_batch_safe(coefficients: np.ndarray, powers: np.ndarray,
                              bases: np.ndarray) -> np.ndarray:
  coefficients = np.ascontiguousarray(coefficients, dtype=np.float64)
  powers = np.ascontiguousarray(powers, dtype=np.float64)
  bases = np.ascontiguousarray(bases, dtype=np.float64)
  if bases.ndim != 2 or bases.shape[1] != coefficients.shape[0]:
    raise ValueError(f"bases must have shape (n_samples, {coefficients.shape[0]}), got {bases.shape}")
  with np.errstate(all='ignore'):
    return evaluate_terms_batch(coefficients, powers, bases)
