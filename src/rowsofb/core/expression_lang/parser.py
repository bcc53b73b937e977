"""
Recursive descent parser for the RowsOfB expression language.

Grammar:
    line    → expr ("->" (MVAR | SVAR))? EOF
    expr    → term (("+" | "-") term)*
    term    → factor (("*" | "/") factor)*
    factor  → "-"? NUM
            | "-"? FUNC "(" expr ("," expr)* ")"
            | "-"? (DMVAR | DSVAR | DAMVAR | MVAR | SVAR)
            | "-"? "(" expr ")"

One token of lookahead; any unexpected token raises ParseError naming the
kinds that would have been accepted. Groups and calls nest at most
MAX_NESTING_DEPTH levels deep; deeper input is a ParseError too.
"""

from __future__ import annotations

import logging

from rowsofb.core.errors import ErrorContext, ParseError
from rowsofb.core.expression_lang.tokenizer import Token, TokenKind, tokenize
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

logger = logging.getLogger(__name__)

_VARIABLE_KINDS: dict[TokenKind, VarRefKind] = {
    TokenKind.MVAR: VarRefKind.MATRIX,
    TokenKind.SVAR: VarRefKind.SCALAR,
    TokenKind.DMVAR: VarRefKind.DEFINE_MATRIX,
    TokenKind.DSVAR: VarRefKind.DEFINE_SCALAR,
    TokenKind.DAMVAR: VarRefKind.DEFINE_ANONYMOUS,
}

# Combined depth of parenthesized groups and function calls
MAX_NESTING_DEPTH = 100

_ADD_OPS = {TokenKind.PLUS: AddOp.ADD, TokenKind.MINUS: AddOp.SUB}
_MUL_OPS = {TokenKind.MULT: MulOp.MUL, TokenKind.DIV: MulOp.DIV}


class _Parser:
    """Recursive descent parser over a token list."""

    def __init__(self, tokens: list[Token], source: str | None = None) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            tokens = [*tokens, Token(TokenKind.EOF, "", tokens[-1].pos + 1 if tokens else 0)]
        self.tokens = tokens
        self.source = source
        self.pos = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def expect(self, *kinds: TokenKind) -> Token:
        if self.current.kind not in kinds:
            raise self.error(*kinds)
        return self.advance()

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.current.kind in kinds:
            return self.advance()
        return None

    def error(self, *expected: TokenKind) -> ParseError:
        tok = self.current
        context = None
        if self.source is not None:
            context = ErrorContext(source=self.source, column=tok.pos + 1)
        return ParseError(
            expected=tuple(kind.value for kind in expected),
            found=tok.kind.value,
            pos=tok.pos,
            context=context,
        )

    def enter_nested(self) -> None:
        """Count one level of parentheses or call arguments."""
        if self.depth >= MAX_NESTING_DEPTH:
            tok = self.current
            context = None
            if self.source is not None:
                context = ErrorContext(source=self.source, column=tok.pos + 1)
            raise ParseError(
                expected=(),
                found=tok.kind.value,
                pos=tok.pos,
                context=context,
                message=f"expression nested too deeply (more than {MAX_NESTING_DEPTH} levels)",
            )
        self.depth += 1

    # -- Grammar rules --

    def parse_line(self) -> Expr:
        """expr ('->' (MVAR | SVAR))? EOF"""
        expr = self.parse_expr()

        if self.match(TokenKind.ARROW):
            target = self.expect(TokenKind.MVAR, TokenKind.SVAR)
            expr = expr.model_copy(
                update={"result_var": VariableRef(kind=_VARIABLE_KINDS[target.kind], name=target.value)}
            )

        self.expect(TokenKind.EOF)
        return expr

    def parse_expr(self) -> Expr:
        """term (('+' | '-') term)*"""
        first = self.parse_term()
        rest: list[tuple[AddOp, Term]] = []
        while self.current.kind in _ADD_OPS:
            op = _ADD_OPS[self.advance().kind]
            rest.append((op, self.parse_term()))
        return Expr(first=first, rest=rest)

    def parse_term(self) -> Term:
        """factor (('*' | '/') factor)*"""
        first = self.parse_factor()
        rest: list[tuple[MulOp, Factor]] = []
        while self.current.kind in _MUL_OPS:
            op = _MUL_OPS[self.advance().kind]
            rest.append((op, self.parse_factor()))
        return Term(first=first, rest=rest)

    def parse_factor(self) -> Factor:
        """'-'? (NUM | func_call | variable | '(' expr ')')"""
        negated = self.match(TokenKind.MINUS) is not None
        return Factor(operand=self.parse_operand(), negated=negated)

    def parse_operand(self) -> Operand:
        tok = self.current

        if tok.kind == TokenKind.NUM:
            self.advance()
            return NumberLiteral(value=int(tok.value))

        if tok.kind == TokenKind.FUNC:
            return self._parse_func_call()

        if tok.kind == TokenKind.LPAREN:
            self.enter_nested()
            self.advance()
            inner = self.parse_expr()
            self.expect(TokenKind.RPAREN)
            self.depth -= 1
            return Group(expr=inner)

        if tok.kind in _VARIABLE_KINDS:
            self.advance()
            kind = _VARIABLE_KINDS[tok.kind]
            name = None if kind == VarRefKind.DEFINE_ANONYMOUS else tok.value[-1]
            return VariableRef(kind=kind, name=name)

        raise self.error(
            TokenKind.NUM,
            TokenKind.FUNC,
            TokenKind.LPAREN,
            TokenKind.MVAR,
            TokenKind.SVAR,
            TokenKind.DMVAR,
            TokenKind.DSVAR,
            TokenKind.DAMVAR,
        )

    def _parse_func_call(self) -> FuncCall:
        """FUNC '(' expr (',' expr)* ')'"""
        self.enter_nested()
        name_tok = self.expect(TokenKind.FUNC)
        self.expect(TokenKind.LPAREN)

        args = [self.parse_expr()]
        while self.match(TokenKind.COMMA):
            args.append(self.parse_expr())

        self.expect(TokenKind.RPAREN)
        self.depth -= 1
        return FuncCall(name=name_tok.value, args=args)


def parse(tokens: list[Token], source: str | None = None) -> Expr:
    """Parse a token list (as produced by tokenize) into an expression tree.

    Args:
        tokens: Tokens ending with EOF.
        source: Original input line, used to point at errors.

    Raises:
        ParseError: On any unexpected token, including trailing input.
    """
    expr = _Parser(tokens, source).parse_line()
    logger.debug("Parsed %s", expr)
    return expr


def parse_expr(source: str) -> Expr:
    """Tokenize and parse an expression line.

    Args:
        source: Expression line (e.g., "2 * invert(A) -> B")

    Returns:
        Parsed expression tree.

    Raises:
        LexError: If tokenization fails.
        ParseError: If the expression is invalid.
    """
    return parse(tokenize(source), source)
