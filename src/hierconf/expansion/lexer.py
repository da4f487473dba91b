"""
Tokenizer for substitution templates.

A template is plain text with embedded markers:

    $$        a literal '$'
    ${key}    a substitution of the setting named ``key``

Any other use of '$' is malformed. Text between ``${`` and the next ``}`` is
taken verbatim as the key; there is no escaping inside the braces.

Each lexer is one frame of the expansion stack: a frame knows the resolver
its markers are resolved with and the frame that resumes once its own input
is exhausted.
"""

from enum import Enum
from typing import Any, List, Optional

from ..errors import TemplateSyntaxError


class TemplateToken(Enum):
    """Token classes produced by the template lexer."""
    TEXT = "text"
    SUBST = "subst"
    END = "end"


class TemplateLexer:
    """
    Lexer over a single template string.

    Attributes:
        text: Template being scanned
        resolver: Resolver for markers found in this frame
        parent: Frame to resume after this one ends
        depth: Nesting level, 1 for the outermost frame
        token: Current token class
        value: Text of the current token; the key for SUBST tokens
    """

    def __init__(self, text: str, resolver: Any = None, parent: Optional['TemplateLexer'] = None):
        self.text = text
        self.resolver = resolver
        self.parent = parent
        self.depth = 1 if parent is None else parent.depth + 1
        self.position = 0
        self.token: Optional[TemplateToken] = None
        self.value = ""

    def push(self, text: str, resolver: Any) -> 'TemplateLexer':
        """Open a nested frame for a resolved value."""
        return TemplateLexer(text, resolver, self)

    def advance(self) -> TemplateToken:
        """
        Read the next token.

        Raises:
            TemplateSyntaxError: If a '$' is not part of a valid marker
        """
        if self.position >= len(self.text):
            self.token, self.value = TemplateToken.END, ""
        elif self.text.startswith('${', self.position):
            self._scan_subst()
        elif self.text.startswith('$$', self.position) or self.text[self.position] != '$':
            self._scan_text()
        else:
            raise TemplateSyntaxError(f"malformed template: {self.text}")
        return self.token

    def _scan_subst(self) -> None:
        start = self.position + 2
        end = self.text.find('}', start)
        if end < 0:
            raise TemplateSyntaxError(f"unterminated substitution in template: {self.text}")
        self.token, self.value = TemplateToken.SUBST, self.text[start:end]
        self.position = end + 1

    def _scan_text(self) -> None:
        chunks: List[str] = []
        start = self.position
        length = len(self.text)
        while self.position < length:
            dollar = self.text.find('$', self.position)
            if dollar < 0:
                self.position = length
                break
            if not self.text.startswith('$$', dollar):
                self.position = dollar
                break
            # Fold the escaped '$' into the run
            chunks.append(self.text[start:dollar + 1])
            self.position = start = dollar + 2
        chunks.append(self.text[start:self.position])
        self.token, self.value = TemplateToken.TEXT, ''.join(chunks)
