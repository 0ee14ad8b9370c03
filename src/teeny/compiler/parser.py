"""
Teeny BASIC Recursive Descent Parser
====================================

This module implements a single-pass recursive descent parser for Teeny
BASIC. There is no syntax tree: each grammar procedure checks its part of
the token stream and immediately hands the matching C fragment to the
Emitter.

Grammar (EBNF)
--------------
program     ::= NEWLINE* statement* EOF
statement   ::= "PRINT" (expression | STRING) nl
              | "IF" comparison "THEN" nl statement* "ENDIF" nl
              | "WHILE" comparison "REPEAT" nl statement* "ENDWHILE" nl
              | "LABEL" IDENTIFIER nl
              | "GOTO" IDENTIFIER nl
              | "LET" IDENTIFIER "=" expression nl
              | "INPUT" IDENTIFIER nl
comparison  ::= expression (("==" | "!=" | ">" | ">=" | "<" | "<=") expression)+
expression  ::= term (("+" | "-") term)*
term        ::= unary (("*" | "/") unary)*
unary       ::= ("+" | "-")? primary
primary     ::= NUMBER | IDENTIFIER
nl          ::= NEWLINE+

Semantic Checks
---------------
- Variables come into existence when LET or INPUT first assigns them and
  may not be read before that. There is no hoisting.
- Label names must be unique.
- GOTO may jump forward. Whether every GOTO target exists is checked
  once, after the whole program has been read.

Lookahead
---------
The parser holds the current token and one token of lookahead, pulled
from the lexer on demand. Both are loaded before parsing starts.

Example Usage
-------------
>>> from teeny.compiler.lexer import Lexer
>>> from teeny.compiler.emitter import Emitter
>>> from teeny.compiler.parser import Parser
>>> emitter = Emitter()
>>> Parser(Lexer('LET x = 5\\nPRINT x'), emitter).parse()
>>> print(emitter.output)
#include <stdio.h>
int main(void){
float x;
x = 5;
printf("%.2f\\n", (float)(x));
return 0;
}
"""

import logging
from typing import Optional

from teeny.errors import SourceLocation
from teeny.compiler.lexer import Lexer, Token, TokenType, COMPARISON_TYPES
from teeny.compiler.emitter import Emitter
from teeny.compiler.errors import (
    UnexpectedTokenError,
    InvalidStatementError,
    MissingComparisonError,
    UndeclaredVariableError,
    DuplicateLabelError,
    UndeclaredLabelError,
)


logger = logging.getLogger(__name__)


class Parser:
    """
    Recursive descent parser and translator for Teeny BASIC.

    Attributes:
        lexer: Token source
        emitter: Receives the generated C fragments
        symbols: Declared variables, mapped to where they were first assigned
        labels_declared: Declared labels, mapped to their LABEL statement
        labels_used: GOTO targets, mapped to the first GOTO naming them
        token_count: Number of tokens pulled from the lexer so far
    """

    def __init__(self, lexer: Lexer, emitter: Emitter, trace: bool = False):
        """
        Initialize the parser and load the first two tokens.

        Args:
            lexer: Token source
            emitter: Destination for generated code
            trace: Log each grammar rule as it is recognized

        Raises:
            LexicalError: If the first tokens cannot be scanned
        """
        self.lexer = lexer
        self.emitter = emitter
        self.trace = trace

        self.symbols: dict[str, SourceLocation] = {}
        self.labels_declared: dict[str, SourceLocation] = {}
        self.labels_used: dict[str, SourceLocation] = {}
        self.token_count = 0

        self._source_lines = lexer.source.splitlines()

        self.current_token: Optional[Token] = None
        self.peek_token: Optional[Token] = None
        self._next_token()
        self._next_token()

    def parse(self) -> None:
        """
        Parse the whole program, emitting C as it goes.

        Raises:
            BasicError: On the first lexical, syntax or semantic error
        """
        self._parse_program()

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _check(self, *types: TokenType) -> bool:
        """Check if the current token is one of the given types."""
        return self.current_token.type in types

    def _next_token(self) -> None:
        """Shift the lookahead into the current slot and pull a new one."""
        self.current_token = self.peek_token
        if self.current_token is not None and self.current_token.type == TokenType.EOF:
            # The lexer is finished; keep the EOF in both slots.
            self.peek_token = self.current_token
            return
        self.peek_token = self.lexer.next_token()
        self.token_count += 1

    def _expect(self, token_type: TokenType) -> Token:
        """
        Consume the current token, which must be of ``token_type``.

        Raises:
            UnexpectedTokenError: If the current token is of another type
        """
        token = self.current_token
        if token.type != token_type:
            raise UnexpectedTokenError(
                token.type.name,
                token_type.name,
                location=token.location,
                source_line=self._source_line(token.line),
            )
        self._next_token()
        return token

    def _source_line(self, line: int) -> Optional[str]:
        index = line - 1
        if 0 <= index < len(self._source_lines):
            return self._source_lines[index]
        return None

    def _trace_rule(self, rule: str) -> None:
        if self.trace:
            logger.debug(rule)

    # =========================================================================
    # Program and Statements
    # =========================================================================

    def _parse_program(self) -> None:
        """program ::= NEWLINE* statement* EOF"""
        self._trace_rule("PROGRAM")
        self.emitter.header_line("#include <stdio.h>")
        self.emitter.header_line("int main(void){")

        while self._check(TokenType.NEWLINE):
            self._next_token()

        while not self._check(TokenType.EOF):
            self._parse_statement()

        self.emitter.emit_line("return 0;")
        self.emitter.emit_line("}")

        # Forward jumps are legal, so targets can only be checked now.
        for label, location in self.labels_used.items():
            if label not in self.labels_declared:
                raise UndeclaredLabelError(
                    label,
                    location=location,
                    source_line=self._source_line(location.line),
                )

    def _parse_statement(self) -> None:
        """Parse one statement and its terminating newline(s)."""
        token = self.current_token

        if token.type == TokenType.PRINT:
            self._parse_print()
        elif token.type == TokenType.IF:
            self._parse_if()
        elif token.type == TokenType.WHILE:
            self._parse_while()
        elif token.type == TokenType.LABEL:
            self._parse_label()
        elif token.type == TokenType.GOTO:
            self._parse_goto()
        elif token.type == TokenType.LET:
            self._parse_let()
        elif token.type == TokenType.INPUT:
            self._parse_input()
        else:
            raise InvalidStatementError(
                token.text,
                token.type.name,
                location=token.location,
                source_line=self._source_line(token.line),
            )

        self._parse_newline()

    def _parse_print(self) -> None:
        """PRINT (expression | STRING)"""
        self._trace_rule("STATEMENT-PRINT")
        self._next_token()

        if self._check(TokenType.STRING):
            self.emitter.emit_line(f'printf("{self.current_token.text}\\n");')
            self._next_token()
        else:
            self.emitter.emit('printf("%.2f\\n", (float)(')
            self._parse_expression()
            self.emitter.emit_line("));")

    def _parse_if(self) -> None:
        """IF comparison THEN nl statement* ENDIF"""
        self._trace_rule("STATEMENT-IF")
        self._next_token()

        self.emitter.emit("if(")
        self._parse_comparison()
        self._expect(TokenType.THEN)
        self._parse_newline()
        self.emitter.emit_line("){")

        self._parse_block(TokenType.ENDIF)
        self.emitter.emit_line("}")

    def _parse_while(self) -> None:
        """WHILE comparison REPEAT nl statement* ENDWHILE"""
        self._trace_rule("STATEMENT-WHILE")
        self._next_token()

        self.emitter.emit("while(")
        self._parse_comparison()
        self._expect(TokenType.REPEAT)
        self._parse_newline()
        self.emitter.emit_line("){")

        self._parse_block(TokenType.ENDWHILE)
        self.emitter.emit_line("}")

    def _parse_block(self, terminator: TokenType) -> None:
        """Zero or more statements, then the closing keyword."""
        while not self._check(terminator):
            if self._check(TokenType.EOF):
                raise UnexpectedTokenError(
                    TokenType.EOF.name,
                    terminator.name,
                    location=self.current_token.location,
                )
            self._parse_statement()
        self._expect(terminator)

    def _parse_label(self) -> None:
        """LABEL IDENTIFIER"""
        self._trace_rule("STATEMENT-LABEL")
        self._next_token()

        token = self.current_token
        self._expect(TokenType.IDENTIFIER)

        if token.text in self.labels_declared:
            raise DuplicateLabelError(
                token.text,
                location=token.location,
                original_location=self.labels_declared[token.text],
                source_line=self._source_line(token.line),
            )
        self.labels_declared[token.text] = token.location

        # An empty statement after the colon keeps a trailing label valid C
        self.emitter.emit_line(f"{token.text}:;")

    def _parse_goto(self) -> None:
        """GOTO IDENTIFIER"""
        self._trace_rule("STATEMENT-GOTO")
        self._next_token()

        token = self._expect(TokenType.IDENTIFIER)
        self.labels_used.setdefault(token.text, token.location)
        self.emitter.emit_line(f"goto {token.text};")

    def _parse_let(self) -> None:
        """LET IDENTIFIER = expression"""
        self._trace_rule("STATEMENT-LET")
        self._next_token()

        token = self._expect(TokenType.IDENTIFIER)
        self._declare(token)

        self.emitter.emit(f"{token.text} = ")
        self._expect(TokenType.ASSIGN)
        self._parse_expression()
        self.emitter.emit_line(";")

    def _parse_input(self) -> None:
        """
        INPUT IDENTIFIER

        The generated read resets the variable to zero and discards the
        offending word when the user types something that is not a number.
        """
        self._trace_rule("STATEMENT-INPUT")
        self._next_token()

        token = self._expect(TokenType.IDENTIFIER)
        self._declare(token)

        name = token.text
        self.emitter.emit_line(f'if(0 == scanf("%f", &{name})) {{')
        self.emitter.emit_line(f"{name} = 0;")
        self.emitter.emit_line('scanf("%*s");')
        self.emitter.emit_line("}")

    def _parse_newline(self) -> None:
        """nl ::= NEWLINE+"""
        self._trace_rule("NEWLINE")
        self._expect(TokenType.NEWLINE)
        while self._check(TokenType.NEWLINE):
            self._next_token()

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_comparison(self) -> None:
        """comparison ::= expression (compare_op expression)+"""
        self._trace_rule("COMPARISON")
        self._parse_expression()

        if not self._check(*COMPARISON_TYPES):
            raise MissingComparisonError(
                self.current_token.text,
                location=self.current_token.location,
                source_line=self._source_line(self.current_token.line),
            )

        while self._check(*COMPARISON_TYPES):
            self.emitter.emit(f" {self.current_token.text} ")
            self._next_token()
            self._parse_expression()

    def _parse_expression(self) -> None:
        """expression ::= term (("+" | "-") term)*"""
        self._trace_rule("EXPRESSION")
        self._parse_term()

        while self._check(TokenType.PLUS, TokenType.MINUS):
            self.emitter.emit(f" {self.current_token.text} ")
            self._next_token()
            self._parse_term()

    def _parse_term(self) -> None:
        """term ::= unary (("*" | "/") unary)*"""
        self._trace_rule("TERM")
        self._parse_unary()

        while self._check(TokenType.STAR, TokenType.SLASH):
            self.emitter.emit(f" {self.current_token.text} ")
            self._next_token()
            self._parse_unary()

    def _parse_unary(self) -> None:
        """unary ::= ("+" | "-")? primary"""
        self._trace_rule("UNARY")

        if self._check(TokenType.PLUS, TokenType.MINUS):
            self.emitter.emit(self.current_token.text)
            self._next_token()

        self._parse_primary()

    def _parse_primary(self) -> None:
        """primary ::= NUMBER | IDENTIFIER"""
        token = self.current_token
        self._trace_rule(f"PRIMARY ({token.text})")

        if token.type == TokenType.NUMBER:
            self.emitter.emit(token.text)
        elif token.type == TokenType.IDENTIFIER:
            if token.text not in self.symbols:
                raise UndeclaredVariableError(
                    token.text,
                    location=token.location,
                    source_line=self._source_line(token.line),
                )
            self.emitter.emit(token.text)
        else:
            raise UnexpectedTokenError(
                token.type.name,
                "number or variable",
                location=token.location,
                source_line=self._source_line(token.line),
            )

        self._next_token()

    # =========================================================================
    # Symbol Table
    # =========================================================================

    def _declare(self, token: Token) -> None:
        """Declare a variable on first assignment; later ones are no-ops."""
        if token.text not in self.symbols:
            self.symbols[token.text] = token.location
            self.emitter.header_line(f"float {token.text};")

