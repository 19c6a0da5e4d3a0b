"""
Pydantic models for everything that crosses the host toolchain boundary.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class SourceLocation(BaseModel):
    """Where a diagnostic points: the directive or one of its arguments."""
    model_config = ConfigDict(frozen=True)

    file: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    symbol: Optional[str] = None

    def __str__(self) -> str:
        parts = [self.file or "<unknown>"]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        text = ":".join(parts)
        if self.symbol:
            text = f"{text} ({self.symbol})"
        return text


class Diagnostic(BaseModel):
    """A failed expansion, reported against a source location."""
    model_config = ConfigDict(frozen=True)

    id: str
    message: str
    severity: str = "error"
    location: SourceLocation = SourceLocation()

    def __str__(self) -> str:
        return f"{self.location}: {self.severity}: {self.message} [{self.id}]"


class AccessorFragments(BaseModel):
    """Rendered getter/setter pair for one property."""
    model_config = ConfigDict(frozen=True)

    property_name: str
    key: str
    store: str
    getter: str
    setter: str

    @property
    def source(self) -> str:
        return f"{self.getter}\n\n{self.setter}\n"


class ExpansionReport(BaseModel):
    """Outcome of expanding a batch of declarations."""
    fragments: List[AccessorFragments] = []
    diagnostics: List[Diagnostic] = []

    @property
    def ok(self) -> bool:
        return not self.diagnostics
