import numpy as np
from typing import List, Optional, Sequence
from ..core.scalar import Scalar
from ...logging_system import LogLevel, log_info, log_warning

# Sweep covering zero, negative and fractional inputs
DEFAULT_SAMPLE_POINTS = (-2.5, -1.0, -0.5, 0.0, 0.25, 0.5, 1.0, 2.0, 3.7)


class ExpressionValidator:

  @staticmethod
  def check_canonical(expr) -> List[str]:
    """Describe every way `expr` breaks canonical form (empty when canonical)"""
    problems = []
    terms = expr.terms

    constants = [i for i, term in enumerate(terms) if term.is_constant()]
    if len(constants) != 1:
      problems.append(f"expected one constant slot, found {len(constants)}")
    elif constants[0] != expr.constant_index:
      problems.append(f"constant slot is at {constants[0]} but recorded at {expr.constant_index}")

    for i in range(len(terms) - 1):
      if terms[i].rank > terms[i + 1].rank:
        problems.append(f"terms {i} and {i + 1} out of order: {terms[i]} then {terms[i + 1]}")

    for i in range(len(terms)):
      for j in range(i + 1, len(terms)):
        if terms[i].can_combine(terms[j]):
          problems.append(f"terms {i} and {j} are combinable: {terms[i]} and {terms[j]}")

    for problem in problems:
      log_warning(f"Non-canonical expression '{expr}': {problem}")
    return problems

  @staticmethod
  def is_canonical(expr) -> bool:
    return not ExpressionValidator.check_canonical(expr)

  @staticmethod
  def agrees_with_compiled(expr, samples: Optional[Sequence[float]] = None,
                           rtol: float = 1e-9) -> bool:
    """Interpreted evaluation at each sample matches the compiled closure.

    NaN on both sides counts as agreement, as do equal infinities.
    """
    if samples is None:
      samples = DEFAULT_SAMPLE_POINTS
    compiled = expr.compile()
    interpreted = np.array([float(expr.evaluate(value)) for value in samples], dtype=np.float64)
    fast = compiled(np.asarray(samples, dtype=np.float64))

    agree = np.isclose(interpreted, fast, rtol=rtol, atol=0.0, equal_nan=True)
    for value, a, b in zip(np.asarray(samples)[~agree], interpreted[~agree], fast[~agree]):
      log_warning(f"'{expr}' at {value}: interpreted {a!r}, compiled {b!r}")
    log_info(f"Compiled agreement for '{expr}': {int(agree.sum())}/{len(agree)}",
             LogLevel.DETAILED)
    return bool(np.all(agree))

  @staticmethod
  def is_valid_expression(expr, samples: Optional[Sequence[float]] = None) -> bool:
    """Canonical and finite at every sample point"""
    if not ExpressionValidator.is_canonical(expr):
      return False
    if samples is None:
      samples = DEFAULT_SAMPLE_POINTS
    for value in samples:
      result: Scalar = expr.evaluate(value)
      if not result.is_finite:
        log_info(f"'{expr}' is not finite at {value}: {result}", LogLevel.MODERATE)
        return False
    return True
