"""
RowsOfB expression language.

Tokenizer, parser, function registry and evaluator for one-line
expressions over rational scalars and matrices.

Usage:
    from rowsofb.core.environment import Environment
    from rowsofb.core.expression_lang import evaluate, parse_expr

    env = Environment()
    result = evaluate(parse_expr("identity(2) * 3 -> A"), env)
    # result.value is a 2x2 matrix, result.assigned_to == "A"
"""

from rowsofb.core.expression_lang.evaluator import EvalResult, evaluate, evaluate_line
from rowsofb.core.expression_lang.functions import list_functions
from rowsofb.core.expression_lang.parser import parse, parse_expr
from rowsofb.core.expression_lang.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "EvalResult",
    "Token",
    "TokenKind",
    "evaluate",
    "evaluate_line",
    "list_functions",
    "parse",
    "parse_expr",
    "tokenize",
]
