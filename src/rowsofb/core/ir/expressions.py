"""
Expression tree types for the RowsOfB language.

The tree mirrors the grammar's precedence levels exactly:

    Expr    one Term, then (+|-) Term pairs, then an optional "-> X" target
    Term    one Factor, then (*|/) Factor pairs
    Factor  an optional unary minus applied to one operand:
            number, function call, variable reference, or (Expr)

Terms keep their operator chain flat rather than nesting binary nodes,
because the evaluator groups multiplicative runs between divisions.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class AddOp(StrEnum):
    """Additive operators joining terms."""

    ADD = "+"
    SUB = "-"


class MulOp(StrEnum):
    """Multiplicative operators joining factors."""

    MUL = "*"
    DIV = "/"


class VarRefKind(StrEnum):
    """The five ways a factor can refer to a variable."""

    MATRIX = "mvar"  # A
    SCALAR = "svar"  # a
    DEFINE_MATRIX = "dmvar"  # $A
    DEFINE_SCALAR = "dsvar"  # $a
    DEFINE_ANONYMOUS = "damvar"  # $$


# ---------------------------------------------------------------------------
# Operands
# ---------------------------------------------------------------------------


class NumberLiteral(BaseModel):
    """A non-negative integer literal; signs are handled by Factor."""

    value: int = Field(ge=0, description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class VariableRef(BaseModel):
    """
    Reference to a variable slot.

    Examples:
        - VariableRef(kind=MATRIX, name="A") → A
        - VariableRef(kind=DEFINE_SCALAR, name="x") → $x
        - VariableRef(kind=DEFINE_ANONYMOUS) → $$
    """

    kind: VarRefKind
    name: str | None = Field(default=None, description="Slot letter; None for $$")

    model_config = ConfigDict(frozen=True)

    @property
    def defines(self) -> bool:
        """True for the definition-on-use kinds ($A, $a, $$)."""
        return self.kind in (
            VarRefKind.DEFINE_MATRIX,
            VarRefKind.DEFINE_SCALAR,
            VarRefKind.DEFINE_ANONYMOUS,
        )

    def __str__(self) -> str:
        if self.kind == VarRefKind.DEFINE_ANONYMOUS:
            return "$$"
        if self.defines:
            return f"${self.name}"
        return str(self.name)


class FuncCall(BaseModel):
    """
    Function call: name(arg1, arg2, ...).

    Built-in functions: identity, ref, rref, invert, augment, transpose.
    """

    name: str = Field(description="Function name")
    args: list[Expr] = Field(description="Arguments, at least one")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.args)
        return f"{self.name}({args_str})"


class Group(BaseModel):
    """A parenthesized sub-expression."""

    expr: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.expr})"


Operand = NumberLiteral | FuncCall | VariableRef | Group


# ---------------------------------------------------------------------------
# Precedence levels
# ---------------------------------------------------------------------------


class Factor(BaseModel):
    """An operand with an optional unary minus."""

    operand: Operand
    negated: bool = False

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"-{self.operand}" if self.negated else str(self.operand)


class Term(BaseModel):
    """Factors joined by * and /, kept as a flat chain."""

    first: Factor
    rest: list[tuple[MulOp, Factor]] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def factors(self) -> list[Factor]:
        return [self.first] + [factor for _, factor in self.rest]

    def __str__(self) -> str:
        parts = [str(self.first)]
        for op, factor in self.rest:
            parts.append(f"{op.value} {factor}")
        return " ".join(parts)


class Expr(BaseModel):
    """Terms joined by + and -, with an optional assignment target."""

    first: Term
    rest: list[tuple[AddOp, Term]] = Field(default_factory=list)
    result_var: VariableRef | None = Field(default=None, description="Target of '->'")

    model_config = ConfigDict(frozen=True)

    @property
    def terms(self) -> list[Term]:
        return [self.first] + [term for _, term in self.rest]

    def __str__(self) -> str:
        parts = [str(self.first)]
        for op, term in self.rest:
            parts.append(f"{op.value} {term}")
        if self.result_var is not None:
            parts.append(f"-> {self.result_var}")
        return " ".join(parts)


# Rebuild models for recursive forward references
FuncCall.model_rebuild()
Group.model_rebuild()
Factor.model_rebuild()
Term.model_rebuild()
Expr.model_rebuild()
