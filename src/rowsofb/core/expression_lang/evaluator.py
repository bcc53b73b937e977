"""
Expression evaluator for the RowsOfB language.

Walks an expression tree against an Environment and produces a tagged
Value. Value kinds (scalar or matrix) are checked at every combination
site. Evaluation is synchronous; the only blocking points are the
environment's Definer callbacks for ``$A``, ``$a`` and ``$$`` factors.

Side effects:
    - ``$A`` / ``$a`` factors write the defined value into that slot as
      soon as they are evaluated. These writes are NOT rolled back if the
      rest of the expression fails.
    - ``-> X`` / ``-> x`` stores the result in that slot.
    - Every matrix result is also stored in ``Z`` and every scalar result
      (reduced) in ``z``.

Multiplicative terms are NOT evaluated left-associatively. Factors joined
only by ``*`` form a run whose product is computed first; ``/`` closes a
run. The runs are then divided left to right::

    2*3/4*6/10  ==  (2*3) / (4*6) / 10  ==  1/40

This grouping is part of the language and must be kept.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rowsofb.core import matrix as mx
from rowsofb.core.environment import MATRIX_RESULT, SCALAR_RESULT, Environment
from rowsofb.core.errors import (
    DimensionError,
    EvaluationError,
    InputCancelledError,
    TypeMismatchError,
)
from rowsofb.core.expression_lang.functions import call_function, lookup
from rowsofb.core.expression_lang.parser import parse_expr
from rowsofb.core.ir.expressions import (
    AddOp,
    Expr,
    Factor,
    FuncCall,
    Group,
    MulOp,
    NumberLiteral,
    Operand,
    Term,
    VariableRef,
    VarRefKind,
)
from rowsofb.core.rational import MINUS_ONE, Rational
from rowsofb.core.values import Value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvalResult:
    """The value of a line, and the slot named by ``->`` if there was one."""

    value: Value
    assigned_to: str | None = None


def evaluate(expr: Expr, env: Environment) -> EvalResult:
    """Evaluate an expression tree and apply its assignments.

    Args:
        expr: Parsed expression tree.
        env: Variable environment; mutated by definitions and assignments.

    Returns:
        The result value and the explicitly assigned slot, if any.

    Raises:
        EvaluationError: If evaluation fails. Subclasses name the cause.
    """
    target = expr.result_var
    if target is not None and (target.name is None or target.defines):
        raise EvaluationError(f"cannot assign to {target}")

    value = _eval_expr(expr, env)

    assigned_to = None
    if target is not None and target.name is not None:
        if value.is_matrix and target.kind == VarRefKind.SCALAR:
            raise TypeMismatchError("cannot assign a matrix value to a scalar variable")
        if value.is_scalar and target.kind == VarRefKind.MATRIX:
            raise TypeMismatchError("cannot assign a scalar value to a matrix variable")
        _store(env, target.name, value)
        assigned_to = target.name

    _store(env, MATRIX_RESULT if value.is_matrix else SCALAR_RESULT, value)
    return EvalResult(value=value, assigned_to=assigned_to)


def evaluate_line(source: str, env: Environment) -> EvalResult:
    """Tokenize, parse and evaluate one input line."""
    return evaluate(parse_expr(source), env)


def _store(env: Environment, name: str, value: Value) -> None:
    if value.is_matrix:
        env.set_matrix(name, value.as_matrix())
    else:
        env.set_scalar(name, value.as_scalar())


# ---------------------------------------------------------------------------
# Additive level
# ---------------------------------------------------------------------------


def _eval_expr(expr: Expr, env: Environment) -> Value:
    """Fold terms left to right with + and -."""
    accum = _eval_term(expr.first, env)
    for op, term in expr.rest:
        accum = _eval_addition(op == AddOp.SUB, accum, _eval_term(term, env))
    return accum


def _eval_addition(subtraction: bool, left: Value, right: Value) -> Value:
    if left.kind != right.kind:
        raise TypeMismatchError("cannot perform addition or subtraction with a scalar and a matrix")

    if left.is_scalar:
        rhs = right.as_scalar()
        if subtraction:
            rhs = rhs.neg()
        return Value.scalar(left.as_scalar().add(rhs))

    a, b = left.as_matrix(), right.as_matrix()
    if a.shape != b.shape:
        raise DimensionError(
            "cannot perform addition or subtraction on two matrices of different sizes"
        )
    if subtraction:
        b = mx.negate(b)
    return Value.matrix(mx.add(a, b))


# ---------------------------------------------------------------------------
# Multiplicative level
# ---------------------------------------------------------------------------


def _eval_term(term: Term, env: Environment) -> Value:
    """Multiply within runs, then divide the runs left to right."""
    runs: list[Value] = []
    accum = _eval_factor(term.first, env)

    for op, factor in term.rest:
        value = _eval_factor(factor, env)
        if op == MulOp.DIV:
            runs.append(accum)
            accum = value
        else:
            accum = _eval_multiplication(False, accum, value)

    runs.append(accum)

    result = runs[0]
    for divisor in runs[1:]:
        result = _eval_multiplication(True, result, divisor)
    return result


def _eval_multiplication(division: bool, left: Value, right: Value) -> Value:
    if left.is_scalar and right.is_scalar:
        rhs = right.as_scalar()
        if division:
            rhs = rhs.reciprocal()
        return Value.scalar(left.as_scalar().mul(rhs).reduce())

    if left.is_scalar:
        if division:
            raise TypeMismatchError("cannot divide a scalar by a matrix")
        return Value.matrix(mx.scale(left.as_scalar(), right.as_matrix()))

    if right.is_scalar:
        factor = right.as_scalar()
        if division:
            factor = factor.reciprocal()
        return Value.matrix(mx.scale(factor, left.as_matrix()))

    if division:
        raise TypeMismatchError("cannot divide a matrix by a matrix")
    return Value.matrix(mx.multiply(left.as_matrix(), right.as_matrix()))


# ---------------------------------------------------------------------------
# Factors
# ---------------------------------------------------------------------------


def _eval_factor(factor: Factor, env: Environment) -> Value:
    value = _eval_operand(factor.operand, env)
    if not factor.negated:
        return value
    if value.is_matrix:
        return Value.matrix(mx.negate(value.as_matrix()))
    return Value.scalar(value.as_scalar().mul(MINUS_ONE))


def _eval_operand(operand: Operand, env: Environment) -> Value:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(operand, NumberLiteral):
        return Value.scalar(Rational.from_int(operand.value))

    if isinstance(operand, Group):
        return _eval_expr(operand.expr, env)

    if isinstance(operand, FuncCall):
        # Unknown names fail before any argument is evaluated
        spec = lookup(operand.name)
        args = [_eval_expr(arg, env) for arg in operand.args]
        return call_function(spec.name, args)

    if isinstance(operand, VariableRef):
        return _eval_variable(operand, env)

    raise EvaluationError(f"Unknown operand type: {type(operand).__name__}")


def _eval_variable(ref: VariableRef, env: Environment) -> Value:
    if ref.kind == VarRefKind.MATRIX:
        return Value.matrix(env.get_matrix(ref.name))

    if ref.kind == VarRefKind.SCALAR:
        return Value.scalar(env.get_scalar(ref.name))

    if ref.kind == VarRefKind.DEFINE_MATRIX:
        logger.debug("Requesting definition of matrix %s", ref.name)
        defined = env.definer.define_matrix(ref.name)
        if defined is None:
            logger.debug("Definition of %s cancelled", ref.name)
            raise InputCancelledError("user cancelled input")
        env.set_matrix(ref.name, defined)
        return Value.matrix(defined)

    if ref.kind == VarRefKind.DEFINE_SCALAR:
        logger.debug("Requesting definition of scalar %s", ref.name)
        scalar = env.definer.define_scalar(ref.name)
        if scalar is None:
            logger.debug("Definition of %s cancelled", ref.name)
            raise InputCancelledError("user cancelled input")
        env.set_scalar(ref.name, scalar)
        return Value.scalar(env.get_scalar(ref.name))

    logger.debug("Requesting an anonymous matrix")
    anonymous = env.definer.define_anonymous_matrix()
    if anonymous is None:
        logger.debug("Anonymous definition cancelled")
        raise InputCancelledError("user cancelled input")
    return Value.matrix(anonymous)
