"""Kind-keyed registry of lockfile parsers."""

from typing import Dict, List, Optional

from .base import BaseParser


class ParserRegistry:
    """Maps lockfile kinds to the parsers that read them.

    A kind may carry several parsers (``go`` covers both go.sum and go.mod).
    The parser whose ``can_parse`` accepts the path wins; otherwise the
    kind's default parser is used.
    """

    def __init__(self) -> None:
        """Initialize the parser registry."""
        self._parsers: Dict[str, List[BaseParser]] = {}
        self._defaults: Dict[str, BaseParser] = {}

    def register(self, parser: BaseParser, default: bool = False) -> None:
        """Register a parser under its lockfile kind.

        Args:
            parser: Parser instance to register; its ``kind`` attribute
                (e.g. 'npm', 'go') is the registry key
            default: Use this parser when no registered parser claims the path.
                The first parser registered for a kind is the default unless
                another one asks to be.
        """
        kind = parser.kind
        if not kind:
            raise ValueError(f"{type(parser).__name__} does not declare a lockfile kind")

        self._parsers.setdefault(kind, []).append(parser)
        if default or kind not in self._defaults:
            self._defaults[kind] = parser

    def get_parser(self, kind: str, path: Optional[str] = None) -> Optional[BaseParser]:
        """Get the parser for a lockfile kind.

        Args:
            kind: Lockfile kind
            path: Lockfile path, used to pick between parsers of one kind

        Returns:
            Parser instance or None if the kind is unknown
        """
        parsers = self._parsers.get(kind)
        if not parsers:
            return None

        if path is not None and len(parsers) > 1:
            for parser in parsers:
                if parser.can_parse(path):
                    return parser

        return self._defaults[kind]

    def find_kind_for_file(self, path: str) -> Optional[str]:
        """Find the lockfile kind whose parsers accept the given path.

        Args:
            path: Path to the file

        Returns:
            Lockfile kind or None if no parser recognises the file
        """
        for kind, parsers in self._parsers.items():
            if any(parser.can_parse(path) for parser in parsers):
                return kind
        return None

    def get_supported_kinds(self) -> List[str]:
        """Get list of supported lockfile kinds.

        Returns:
            Lockfile kinds in registration order
        """
        return list(self._parsers.keys())

    def get_file_names(self, kind: str) -> List[str]:
        """Get the file names recognised for a lockfile kind."""
        names: List[str] = []
        for parser in self._parsers.get(kind, []):
            names.extend(n for n in parser.file_names if n not in names)
        return names
