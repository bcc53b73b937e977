"""
RowsOfB Intermediate Representation (IR) types.

The expression tree produced by the parser and consumed by the evaluator.
"""

from .expressions import (
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

__all__ = [
    "AddOp",
    "Expr",
    "Factor",
    "FuncCall",
    "Group",
    "MulOp",
    "NumberLiteral",
    "Operand",
    "Term",
    "VariableRef",
    "VarRefKind",
]
