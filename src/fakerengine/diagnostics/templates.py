"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


def _chain_text(chain: tuple[str, ...]) -> str:
    return " -> ".join(chain)


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # ------------------------------------------------------------------
    # Reference errors
    # ------------------------------------------------------------------

    @staticmethod
    def key_not_found(key_path: str, chain: tuple[str, ...]) -> Diagnostic:
        """Key path not defined as a leaf in any locale of the chain.

        Args:
            key_path: Normalized dotted key path
            chain: Locales searched, most specific first

        Returns:
            Diagnostic for KEY_NOT_FOUND
        """
        msg = f"Key '{key_path}' not found in locales {_chain_text(chain)}"
        return Diagnostic(
            code=DiagnosticCode.KEY_NOT_FOUND,
            message=msg,
            hint="Define the key in the locale data or in the default locale",
            key_path=key_path,
            locale_chain=chain,
        )

    @staticmethod
    def key_is_not_leaf(key_path: str, chain: tuple[str, ...]) -> Diagnostic:
        """Key path names a nested mapping, not a value list.

        Args:
            key_path: Normalized dotted key path
            chain: Locales searched, most specific first

        Returns:
            Diagnostic for KEY_IS_NOT_LEAF
        """
        msg = f"Key '{key_path}' is a group of keys, not a list of values"
        return Diagnostic(
            code=DiagnosticCode.KEY_IS_NOT_LEAF,
            message=msg,
            hint="Reference one of the keys nested under it",
            key_path=key_path,
            locale_chain=chain,
        )

    @staticmethod
    def provider_not_found(name: str) -> Diagnostic:
        """No provider registered under a name.

        Args:
            name: Provider name (category.method or global name)

        Returns:
            Diagnostic for PROVIDER_NOT_FOUND
        """
        msg = f"Provider '{name}' not registered"
        return Diagnostic(
            code=DiagnosticCode.PROVIDER_NOT_FOUND,
            message=msg,
            hint="Register it with ProviderRegistry.register()",
            key_path=name,
        )

    # ------------------------------------------------------------------
    # Resolution errors
    # ------------------------------------------------------------------

    @staticmethod
    def empty_candidate_list(key_path: str | None) -> Diagnostic:
        """Resolved value list has no entries.

        Args:
            key_path: Key path the list came from (None for ad-hoc lists)

        Returns:
            Diagnostic for EMPTY_CANDIDATE_LIST
        """
        where = f"'{key_path}'" if key_path else "ad-hoc list"
        msg = f"No candidate values to select from for {where}"
        return Diagnostic(
            code=DiagnosticCode.EMPTY_CANDIDATE_LIST,
            message=msg,
            hint="Use [''] to encode an intentionally empty value",
            key_path=key_path,
        )

    @staticmethod
    def max_passes_exceeded(max_passes: int, template: str) -> Diagnostic:
        """Template still holds directives after the maximum number of passes.

        Args:
            max_passes: Configured pass limit
            template: Top-level template being evaluated

        Returns:
            Diagnostic for MAX_PASSES_EXCEEDED
        """
        msg = f"Template did not resolve within {max_passes} expansion passes"
        return Diagnostic(
            code=DiagnosticCode.MAX_PASSES_EXCEEDED,
            message=msg,
            hint="Check for a key whose value references itself",
            source=template,
        )

    @staticmethod
    def expansion_budget_exceeded(total_chars: int, max_chars: int) -> Diagnostic:
        """Expanded output grew past the character budget.

        Args:
            total_chars: Characters produced so far
            max_chars: Configured budget

        Returns:
            Diagnostic for EXPANSION_BUDGET_EXCEEDED
        """
        msg = f"Expansion produced {total_chars} characters, limit is {max_chars}"
        return Diagnostic(
            code=DiagnosticCode.EXPANSION_BUDGET_EXCEEDED,
            message=msg,
            hint="Check for values that reference their own key more than once",
        )

    @staticmethod
    def expression_depth_exceeded(max_depth: int) -> Diagnostic:
        """Nesting depth limit exceeded.

        Args:
            max_depth: Configured depth limit

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Reduce group nesting or provider re-entry",
        )

    @staticmethod
    def provider_failed(name: str, reason: str) -> Diagnostic:
        """Provider raised while producing a value.

        Args:
            name: Provider name
            reason: Text of the underlying exception

        Returns:
            Diagnostic for PROVIDER_FAILED
        """
        msg = f"Provider '{name}' failed: {reason}"
        return Diagnostic(
            code=DiagnosticCode.PROVIDER_FAILED,
            message=msg,
            hint="Check the arguments passed in the directive",
            key_path=name,
        )

    @staticmethod
    def arguments_without_provider(key_path: str) -> Diagnostic:
        """Arguments given to a directive backed only by data.

        Args:
            key_path: Normalized dotted key path

        Returns:
            Diagnostic for ARGUMENTS_WITHOUT_PROVIDER
        """
        msg = f"Directive '{key_path}' takes no arguments"
        return Diagnostic(
            code=DiagnosticCode.ARGUMENTS_WITHOUT_PROVIDER,
            message=msg,
            hint="Register a provider for this key to handle arguments",
            key_path=key_path,
        )

    # ------------------------------------------------------------------
    # Syntax errors
    # ------------------------------------------------------------------

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Input ended while a token was expected.

        Args:
            position: Character offset of the end of input

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(code=DiagnosticCode.UNEXPECTED_EOF, message=msg)

    @staticmethod
    def unterminated_directive(span: SourceSpan, source: str) -> Diagnostic:
        """Directive opened with #{ but never closed.

        Args:
            span: Location of the opening marker
            source: Template text

        Returns:
            Diagnostic for UNTERMINATED_DIRECTIVE
        """
        msg = "Directive is not closed with '}'"
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_DIRECTIVE,
            message=msg,
            span=span,
            hint="Add '}' after the directive body",
            source=source,
        )

    @staticmethod
    def invalid_directive(reason: str, span: SourceSpan, source: str) -> Diagnostic:
        """Directive body does not follow the directive grammar.

        Args:
            reason: What was wrong
            span: Location of the problem
            source: Template text

        Returns:
            Diagnostic for INVALID_DIRECTIVE
        """
        msg = f"Invalid directive: {reason}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_DIRECTIVE,
            message=msg,
            span=span,
            hint="Directives look like #{Category.method} or #{Category.method('arg')}",
            source=source,
        )

    @staticmethod
    def invalid_argument(reason: str, span: SourceSpan, source: str) -> Diagnostic:
        """Directive argument list is malformed.

        Args:
            reason: What was wrong
            span: Location of the problem
            source: Template text

        Returns:
            Diagnostic for INVALID_ARGUMENT
        """
        msg = f"Invalid directive argument: {reason}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ARGUMENT,
            message=msg,
            span=span,
            hint="Arguments are quoted strings, true, false, numbers or bare words",
            source=source,
        )

    @staticmethod
    def unbalanced_group(span: SourceSpan, source: str) -> Diagnostic:
        """Pattern has an unmatched parenthesis."""
        return Diagnostic(
            code=DiagnosticCode.UNBALANCED_GROUP,
            message="Unbalanced parenthesis in pattern",
            span=span,
            source=source,
        )

    @staticmethod
    def unterminated_class(span: SourceSpan, source: str) -> Diagnostic:
        """Character class opened with [ but never closed."""
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_CLASS,
            message="Character class is not closed with ']'",
            span=span,
            source=source,
        )

    @staticmethod
    def invalid_range(low: str, high: str, span: SourceSpan, source: str) -> Diagnostic:
        """Character range with start after end."""
        msg = f"Invalid character range {low!r}-{high!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_RANGE,
            message=msg,
            span=span,
            hint="Range start must not come after range end",
            source=source,
        )

    @staticmethod
    def nothing_to_repeat(span: SourceSpan, source: str) -> Diagnostic:
        """Quantifier with no preceding atom, or a second quantifier."""
        return Diagnostic(
            code=DiagnosticCode.NOTHING_TO_REPEAT,
            message="Quantifier has nothing to repeat",
            span=span,
            source=source,
        )

    @staticmethod
    def invalid_quantifier(minimum: int, maximum: int, span: SourceSpan, source: str) -> Diagnostic:
        """Bounded quantifier with minimum above maximum."""
        msg = f"Invalid quantifier {{{minimum},{maximum}}}: minimum exceeds maximum"
        return Diagnostic(
            code=DiagnosticCode.INVALID_QUANTIFIER,
            message=msg,
            span=span,
            source=source,
        )

    @staticmethod
    def quantifier_too_large(bound: int, limit: int, span: SourceSpan, source: str) -> Diagnostic:
        """Quantifier bound above the repetition limit."""
        msg = f"Quantifier bound {bound} exceeds the limit of {limit}"
        return Diagnostic(
            code=DiagnosticCode.QUANTIFIER_TOO_LARGE,
            message=msg,
            span=span,
            source=source,
        )

    @staticmethod
    def empty_class(span: SourceSpan, source: str) -> Diagnostic:
        """Character class that matches nothing in the generation alphabet."""
        return Diagnostic(
            code=DiagnosticCode.EMPTY_CLASS,
            message="Character class has no characters to draw from",
            span=span,
            source=source,
        )

    @staticmethod
    def dangling_escape(span: SourceSpan, source: str) -> Diagnostic:
        """Backslash at the end of a pattern."""
        return Diagnostic(
            code=DiagnosticCode.DANGLING_ESCAPE,
            message="Pattern ends with an unfinished escape",
            span=span,
            source=source,
        )

    # ------------------------------------------------------------------
    # Pattern errors
    # ------------------------------------------------------------------

    @staticmethod
    def unsupported_backreference(text: str, span: SourceSpan, source: str) -> Diagnostic:
        """Backreference in a generation pattern."""
        msg = f"Backreference {text!r} is not supported in pattern expansion"
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_BACKREFERENCE,
            message=msg,
            span=span,
            hint="Repeat the referenced group explicitly",
            source=source,
        )

    @staticmethod
    def unsupported_lookaround(text: str, span: SourceSpan, source: str) -> Diagnostic:
        """Lookahead or lookbehind in a generation pattern."""
        msg = f"Lookaround {text!r} is not supported in pattern expansion"
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_LOOKAROUND,
            message=msg,
            span=span,
            source=source,
        )

    @staticmethod
    def unsupported_assertion(text: str, span: SourceSpan, source: str) -> Diagnostic:
        """Boundary assertion in a generation pattern."""
        msg = f"Assertion {text!r} is not supported in pattern expansion"
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_ASSERTION,
            message=msg,
            span=span,
            source=source,
        )

    @staticmethod
    def unsupported_group_flag(text: str, span: SourceSpan, source: str) -> Diagnostic:
        """Inline flag or unknown group extension in a generation pattern."""
        msg = f"Group extension {text!r} is not supported in pattern expansion"
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_GROUP_FLAG,
            message=msg,
            span=span,
            source=source,
        )
